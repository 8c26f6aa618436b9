"""
Kraken Private REST API 클라이언트

요청마다 nonce를 새로 발급하고 서명하며, 세션/토큰은 캐시하지 않음.
IKrakenPrivateClient Protocol 준수.

요청 흐름:
    본문 생성 -> post-data 직렬화 -> 서명 -> POST -> envelope 해제 -> 모델 변환
"""

import logging
from typing import Any, Callable, TypeVar

from adapters.interfaces import IHttpTransport
from adapters.kraken.auth import (
    KrakenCredentials,
    build_auth_headers,
    generate_nonce,
    sign_request,
)
from adapters.kraken.errors import MissingCredentialsError
from adapters.kraken.models import (
    TradesHistoryPage,
    TransactionRecord,
    filter_bitcoin_balances,
    parse_transactions,
    sum_balances,
)
from adapters.kraken.request import PrivateRequest, encode_post_data
from adapters.kraken.response import unwrap
from adapters.kraken.transport import HttpxTransport
from core.config.client import ClientConfig
from core.types import TradeHistoryType

logger = logging.getLogger(__name__)

T = TypeVar("T")


class KrakenRestClient:
    """Kraken Private REST API 클라이언트

    동시 호출 시 각 호출이 독립적으로 nonce를 발급하며 순서를 보장하지 않음.
    엄격한 순서가 필요하면 호출자가 직렬화해야 함.

    Args:
        credentials: API 인증 정보 (None이면 Private API 호출 시 MissingCredentialsError)
        config: 클라이언트 설정 (None이면 기본값)
        transport: HTTP 전송 (None이면 HttpxTransport)
        nonce_factory: nonce 생성 함수 (테스트용 주입)

    사용 예시:
    ```python
    credentials = KrakenCredentials(key="xxx", secret="base64...")
    async with KrakenRestClient(credentials) as client:
        balance = await client.get_btc_balance()
    ```
    """

    def __init__(
        self,
        credentials: KrakenCredentials | None,
        config: ClientConfig | None = None,
        transport: IHttpTransport | None = None,
        nonce_factory: Callable[[], int] = generate_nonce,
    ):
        self.credentials = credentials
        self.config = config or ClientConfig()
        self.transport: IHttpTransport = transport or HttpxTransport(
            timeout=self.config.timeout,
            user_agent=self.config.user_agent,
        )
        self._nonce_factory = nonce_factory

    async def close(self) -> None:
        """HTTP 전송 종료"""
        await self.transport.close()

    async def _query_private(
        self,
        request: PrivateRequest,
        decoder: Callable[[Any], T],
    ) -> T:
        """Private API 요청 실행

        Args:
            request: 메서드 + 본문
            decoder: result 변환 함수

        Returns:
            변환된 결과

        Raises:
            MissingCredentialsError: 인증 정보가 없는 경우 (네트워크 요청 전)
            KrakenSigningError: secret이 올바른 base64가 아닌 경우
            KrakenTransportError: 전송 실패
            KrakenApiError: 응답 error 배열이 비어 있지 않은 경우
            KrakenMissingResultError: 응답에 result가 없는 경우
            KrakenDecodeError: 응답 형식이 잘못된 경우
        """
        if self.credentials is None:
            raise MissingCredentialsError()

        method = request.method.value
        path = self.config.private_path(method)
        url = self.config.private_url(method)
        encoding = self.config.post_data_encoding

        nonce = self._nonce_factory()
        post_data = encode_post_data(request.body, nonce, encoding)

        # 본문 필드는 URL 쿼리에 넣지 않음 (query=None)
        signed = sign_request(
            self.credentials,
            url_path=path,
            query=None,
            post_data=post_data,
            nonce=nonce,
        )

        headers = build_auth_headers(self.credentials, signed.signature)
        headers["Content-Type"] = encoding.content_type

        logger.debug(
            "Kraken private request",
            extra={"method": method, "path": path, "nonce": nonce},
        )

        raw = await self.transport.post(url, headers, signed.post_data)
        return unwrap(raw, decoder)

    # =========================================================================
    # 잔고 조회
    # =========================================================================

    async def get_btc_balances(self) -> dict[str, float]:
        """비트코인 티커 잔고 조회

        Returns:
            티커 -> 잔고 (설정된 BTC 티커만)
        """
        tickers = self.config.btc_tickers
        return await self._query_private(
            PrivateRequest.balance(),
            lambda result: filter_bitcoin_balances(result, tickers),
        )

    async def get_btc_balance(self) -> float:
        """비트코인 잔고 합계 조회

        Returns:
            BTC 티커 잔고 합계 (없으면 0.0)
        """
        balances = await self.get_btc_balances()
        return sum_balances(balances)

    # =========================================================================
    # 입출금 내역 조회
    # =========================================================================

    async def get_deposit_transactions(
        self,
        asset: str | None = None,
    ) -> list[TransactionRecord]:
        """최근 입금 내역 조회

        Args:
            asset: 자산 코드 (None이면 전체)

        Returns:
            입금 내역 목록
        """
        return await self._query_private(
            PrivateRequest.deposit_status(asset),
            parse_transactions,
        )

    async def get_withdraw_transactions(
        self,
        asset: str | None = None,
    ) -> list[TransactionRecord]:
        """최근 출금 내역 조회

        Args:
            asset: 자산 코드 (None이면 전체)

        Returns:
            출금 내역 목록
        """
        return await self._query_private(
            PrivateRequest.withdraw_status(asset),
            parse_transactions,
        )

    # =========================================================================
    # 체결 내역 조회
    # =========================================================================

    async def get_trades_history(
        self,
        type: TradeHistoryType | None = None,
        include_trades: bool | None = None,
        start: int | str | None = None,
        end: int | str | None = None,
        offset: int | None = None,
    ) -> TradesHistoryPage:
        """체결 내역 조회 (최신순, 페이지당 최대 50건)

        Args:
            type: 조회 유형
            include_trades: 포지션 관련 체결 포함 여부
            start: 시작 시각 (Unix 초 또는 txid)
            end: 종료 시각 (Unix 초 또는 txid)
            offset: 결과 오프셋

        Returns:
            체결 내역 페이지
        """
        return await self._query_private(
            PrivateRequest.trades_history(
                type=type,
                include_trades=include_trades,
                start=start,
                end=end,
                offset=offset,
            ),
            TradesHistoryPage.from_api,
        )

    async def __aenter__(self) -> "KrakenRestClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
