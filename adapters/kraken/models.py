"""
Kraken API 응답 모델

API 응답(result)을 파싱하여 데이터클래스로 변환.
금액/수수료는 문자열로 전송되며 디코딩 시점에 float로 변환.
파싱 실패는 0으로 대체하지 않고 KrakenDecodeError로 전파.
"""

import math
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from adapters.kraken.errors import KrakenDecodeError
from core.constants import BTC_TICKERS
from core.types import TransactionStatus


# ASCII 10진수 문자열만 허용 (float()가 받는 공백, 밑줄, 유니코드 숫자 제외)
_DECIMAL_PATTERN = re.compile(r"-?\d+(\.\d+)?([eE][+-]?\d+)?", re.ASCII)


def parse_amount(value: Any, field_name: str = "amount") -> float:
    """숫자 문자열 -> float

    Raises:
        KrakenDecodeError: 문자열이 아니거나 유한한 숫자가 아닌 경우
    """
    if not isinstance(value, str):
        raise KrakenDecodeError(
            f"{field_name}: expected decimal string, got {type(value).__name__}"
        )
    if _DECIMAL_PATTERN.fullmatch(value) is None:
        raise KrakenDecodeError(f"{field_name}: invalid decimal {value!r}")
    parsed = float(value)
    if not math.isfinite(parsed):
        raise KrakenDecodeError(f"{field_name}: invalid decimal {value!r}")
    return parsed


def _require(data: Mapping[str, Any], key: str) -> Any:
    """필수 필드 조회"""
    try:
        return data[key]
    except KeyError as e:
        raise KrakenDecodeError(f"Missing field: {key!r}") from e


# =========================================================================
# 잔고
# =========================================================================


def filter_bitcoin_balances(
    raw: Any,
    tickers: Iterable[str] = BTC_TICKERS,
) -> dict[str, float]:
    """비트코인 티커 잔고만 추출

    화이트리스트는 대소문자 구분 완전 일치. 제외된 티커의 값은 파싱하지 않음.

    Kraken Balance 응답 예시:
    {
        "XXBT": "0.0010000000",
        "XBT.F": "0.5000000000",
        "ZUSD": "171288.6158"
    }

    Args:
        raw: Balance 응답의 result (티커 -> 숫자 문자열)
        tickers: 남길 티커 목록

    Returns:
        티커 -> 잔고

    Raises:
        KrakenDecodeError: 매핑이 아니거나 남길 잔고가 숫자가 아닌 경우
    """
    if not isinstance(raw, Mapping):
        raise KrakenDecodeError(
            f"Balance result must be an object, got {type(raw).__name__}"
        )

    whitelist = frozenset(tickers)
    return {
        ticker: parse_amount(amount, field_name=ticker)
        for ticker, amount in raw.items()
        if ticker in whitelist
    }


def sum_balances(balances: Mapping[str, float]) -> float:
    """잔고 합계 (비어 있으면 0.0)"""
    return float(sum(balances.values(), 0.0))


# =========================================================================
# 입출금
# =========================================================================


@dataclass(frozen=True)
class TransactionRecord:
    """입금/출금 내역

    Attributes:
        refid: 참조 ID
        asset: 자산 코드 (예: XXBT)
        aclass: 자산 클래스 (예: currency)
        method: 입출금 방법 이름 (예: Bitcoin)
        network: 네트워크 (출금만, 입금은 None)
        txid: 방법별 트랜잭션 ID
        info: 방법별 정보 (주소 등)
        amount: 금액
        fee: 수수료
        time: Unix 타임스탬프 (초)
        status: 상태
        status_prop: 추가 상태 속성 (예: return, onhold)
    """

    refid: str
    asset: str
    aclass: str
    method: str
    network: str | None
    txid: str | None
    info: str | None
    amount: float
    fee: float
    time: int
    status: TransactionStatus
    status_prop: str | None = None

    @property
    def is_success(self) -> bool:
        """완료 여부"""
        return self.status == TransactionStatus.SUCCESS

    @property
    def is_failed(self) -> bool:
        """실패 여부"""
        return self.status == TransactionStatus.FAILURE

    @property
    def net_amount(self) -> float:
        """수수료 차감 금액"""
        return self.amount - self.fee

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "TransactionRecord":
        """API 응답에서 생성

        Kraken DepositStatus / WithdrawStatus 항목 예시:
        {
            "method": "Bitcoin",
            "aclass": "currency",
            "asset": "XXBT",
            "refid": "FTQcuak-V6Za8qrWnhzTx67yYHz8Tg",
            "txid": "6544b41b607d8b2512baf801755a3a87b6890eacdb451be8a94059fb11f0a8d9",
            "info": "2Myd4eaAW96ojk38A2uDK4FbioCayvkEgVq",
            "amount": "0.78125000",
            "fee": "0.0000000000",
            "time": 1688992722,
            "status": "Success",
            "status-prop": "return"
        }
        """
        if not isinstance(data, Mapping):
            raise KrakenDecodeError(
                f"Transaction must be an object, got {type(data).__name__}"
            )

        status_raw = _require(data, "status")
        if not isinstance(status_raw, str):
            raise KrakenDecodeError(f"Invalid status: {status_raw!r}")
        try:
            status = TransactionStatus.from_wire(status_raw)
        except ValueError as e:
            raise KrakenDecodeError(str(e)) from e

        try:
            time = int(_require(data, "time"))
        except (TypeError, ValueError) as e:
            raise KrakenDecodeError(f"Invalid time: {data.get('time')!r}") from e

        return cls(
            refid=_require(data, "refid"),
            asset=_require(data, "asset"),
            aclass=_require(data, "aclass"),
            method=_require(data, "method"),
            network=data.get("network"),
            txid=data.get("txid"),
            info=data.get("info"),
            amount=parse_amount(_require(data, "amount"), "amount"),
            fee=parse_amount(_require(data, "fee"), "fee"),
            time=time,
            status=status,
            status_prop=data.get("status-prop"),
        )


def parse_transactions(result: Any) -> list[TransactionRecord]:
    """DepositStatus / WithdrawStatus result -> TransactionRecord 목록"""
    if not isinstance(result, list):
        raise KrakenDecodeError(
            f"Transaction result must be a list, got {type(result).__name__}"
        )
    return [TransactionRecord.from_api(item) for item in result]


# =========================================================================
# 체결 내역
# =========================================================================


@dataclass(frozen=True)
class TradeRecord:
    """체결 정보

    Attributes:
        txid: 체결 ID
        ordertxid: 주문 ID
        pair: 거래쌍 (예: XXBTZUSD)
        time: 체결 시각 (Unix 초, 소수점 포함)
        type: buy/sell
        ordertype: 주문 유형 (market, limit 등)
        price: 평균 체결가
        cost: 총 체결 금액
        fee: 수수료
        vol: 체결 수량
        margin: 사용된 증거금
        misc: 기타 정보 (쉼표 구분)
    """

    txid: str
    ordertxid: str
    pair: str
    time: float
    type: str
    ordertype: str
    price: float
    cost: float
    fee: float
    vol: float
    margin: float = 0.0
    misc: str = ""

    @property
    def is_buy(self) -> bool:
        """매수 체결 여부"""
        return self.type == "buy"

    @classmethod
    def from_api(cls, txid: str, data: Mapping[str, Any]) -> "TradeRecord":
        """API 응답에서 생성

        Kraken TradesHistory 항목 예시:
        "THVRQM-33VKH-UCI7BS": {
            "ordertxid": "OQCLML-BW3P3-BUCMWZ",
            "postxid": "TKH2SE-M7IF5-CFI7LT",
            "pair": "XXBTZUSD",
            "time": 1688667796.8802,
            "type": "buy",
            "ordertype": "limit",
            "price": "30010.00000",
            "cost": "600.20000",
            "fee": "0.00000",
            "vol": "0.02000000",
            "margin": "0.00000",
            "misc": ""
        }
        """
        if not isinstance(data, Mapping):
            raise KrakenDecodeError(
                f"Trade must be an object, got {type(data).__name__}"
            )

        try:
            time = float(_require(data, "time"))
        except (TypeError, ValueError) as e:
            raise KrakenDecodeError(f"Invalid time: {data.get('time')!r}") from e

        margin = data.get("margin")
        return cls(
            txid=txid,
            ordertxid=_require(data, "ordertxid"),
            pair=_require(data, "pair"),
            time=time,
            type=_require(data, "type"),
            ordertype=_require(data, "ordertype"),
            price=parse_amount(_require(data, "price"), "price"),
            cost=parse_amount(_require(data, "cost"), "cost"),
            fee=parse_amount(_require(data, "fee"), "fee"),
            vol=parse_amount(_require(data, "vol"), "vol"),
            margin=parse_amount(margin, "margin") if margin is not None else 0.0,
            misc=data.get("misc", ""),
        )


@dataclass(frozen=True)
class TradesHistoryPage:
    """체결 내역 한 페이지

    Attributes:
        trades: 체결 목록 (응답 순서 유지)
        count: 조건에 맞는 전체 체결 수 (페이지네이션용)
    """

    trades: list[TradeRecord]
    count: int

    @classmethod
    def from_api(cls, result: Any) -> "TradesHistoryPage":
        """API 응답에서 생성"""
        if not isinstance(result, Mapping):
            raise KrakenDecodeError(
                f"TradesHistory result must be an object, got {type(result).__name__}"
            )

        trades_raw = result.get("trades", {})
        if not isinstance(trades_raw, Mapping):
            raise KrakenDecodeError("TradesHistory 'trades' must be an object")

        try:
            count = int(result.get("count", len(trades_raw)))
        except (TypeError, ValueError) as e:
            raise KrakenDecodeError(f"Invalid count: {result.get('count')!r}") from e

        return cls(
            trades=[TradeRecord.from_api(txid, item) for txid, item in trades_raw.items()],
            count=count,
        )
