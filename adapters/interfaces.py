"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class IHttpTransport(Protocol):
    """HTTP 전송 인터페이스

    연결 풀, TLS, 타임아웃은 구현체 책임.
    """

    async def post(
        self,
        url: str,
        headers: dict[str, str],
        content: str,
    ) -> bytes:
        """POST 요청

        Args:
            url: 요청 URL
            headers: 요청 헤더 (API-Key, API-Sign 포함)
            content: 요청 본문 (post-data 문자열 그대로)

        Returns:
            응답 본문 바이트

        Raises:
            KrakenTransportError: 연결 실패 또는 HTTP 에러 상태
        """
        ...

    async def close(self) -> None:
        """연결 종료"""
        ...


@runtime_checkable
class IKrakenPrivateClient(Protocol):
    """Kraken Private API 클라이언트 인터페이스

    모든 메서드는 타입이 지정된 결과를 반환하거나 KrakenError를 발생.
    """

    async def get_btc_balances(self) -> dict[str, float]:
        """비트코인 티커 잔고 조회

        Returns:
            티커 -> 잔고 (비트코인 티커만)
        """
        ...

    async def get_btc_balance(self) -> float:
        """비트코인 잔고 합계 조회"""
        ...

    async def get_deposit_transactions(
        self,
        asset: str | None = None,
    ) -> list["TransactionRecord"]:
        """최근 입금 내역 조회

        Args:
            asset: 자산 코드 (None이면 전체)
        """
        ...

    async def get_withdraw_transactions(
        self,
        asset: str | None = None,
    ) -> list["TransactionRecord"]:
        """최근 출금 내역 조회

        Args:
            asset: 자산 코드 (None이면 전체)
        """
        ...

    async def get_trades_history(
        self,
        type: "TradeHistoryType | None" = None,
        include_trades: bool | None = None,
        start: int | str | None = None,
        end: int | str | None = None,
        offset: int | None = None,
    ) -> "TradesHistoryPage":
        """체결 내역 조회"""
        ...

    async def close(self) -> None:
        """클라이언트 종료"""
        ...


# 순환 참조 방지를 위한 타입 힌트 (런타임에는 문자열로 유지)
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from adapters.kraken.models import TradesHistoryPage, TransactionRecord
    from core.types import TradeHistoryType
