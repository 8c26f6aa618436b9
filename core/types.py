"""
타입 정의 모듈

Kraken Private API에서 사용하는 Enum 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class PrivateMethod(str, Enum):
    """Private API 메서드 (요청 경로의 마지막 세그먼트)"""

    BALANCE = "Balance"
    DEPOSIT_STATUS = "DepositStatus"
    WITHDRAW_STATUS = "WithdrawStatus"
    TRADES_HISTORY = "TradesHistory"


class PostDataEncoding(str, Enum):
    """post-data 직렬화 방식

    두 방식은 같은 입력에 대해 서로 다른 서명을 만든다.
    """

    JSON = "json"
    FORM = "form"

    @property
    def content_type(self) -> str:
        """요청 Content-Type 헤더 값"""
        if self is PostDataEncoding.JSON:
            return "application/json"
        return "application/x-www-form-urlencoded"


class TransactionStatus(str, Enum):
    """입출금 상태

    Kraken은 "Success", "SUCCESS", "success" 등 대소문자를 섞어 보내므로
    from_wire()로 변환해야 함.
    """

    INITIAL = "Initial"
    PENDING = "Pending"
    SETTLED = "Settled"
    SUCCESS = "Success"
    FAILURE = "Failure"

    @classmethod
    def from_wire(cls, value: str) -> "TransactionStatus":
        """API 상태 문자열 -> TransactionStatus (대소문자 무시)

        Raises:
            ValueError: 알 수 없는 상태인 경우
        """
        normalized = value.lower()
        for status in cls:
            if status.value.lower() == normalized:
                return status
        raise ValueError(f"Unknown transaction status: {value!r}")

    @property
    def is_final(self) -> bool:
        """더 이상 변하지 않는 상태인지 여부"""
        return self in (TransactionStatus.SUCCESS, TransactionStatus.FAILURE)


class TradeHistoryType(str, Enum):
    """TradesHistory 조회 유형"""

    ALL = "all"
    ANY_POSITION = "any position"
    CLOSED_POSITION = "closed position"
    CLOSING_POSITION = "closing position"
    NO_POSITION = "no position"
