"""
httpx 기반 HTTP 전송

IHttpTransport Protocol 구현.
타임아웃/연결 풀은 httpx.AsyncClient가 담당하며 재시도하지 않음.
"""

import logging

import httpx

from adapters.kraken.errors import KrakenTransportError
from core.constants import Defaults

logger = logging.getLogger(__name__)


class HttpxTransport:
    """httpx.AsyncClient 래퍼

    Args:
        timeout: 요청 타임아웃 (초)
        user_agent: User-Agent 헤더 값
    """

    def __init__(
        self,
        timeout: float = Defaults.TIMEOUT_SEC,
        user_agent: str = Defaults.USER_AGENT,
    ):
        self.timeout = timeout
        self.user_agent = user_agent
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 가져오기 (lazy initialization)"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
            )
        return self._client

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def post(
        self,
        url: str,
        headers: dict[str, str],
        content: str,
    ) -> bytes:
        """POST 요청

        Raises:
            KrakenTransportError: 연결/TLS/타임아웃 실패 또는 HTTP 4xx/5xx
        """
        client = await self._get_client()

        try:
            response = await client.post(url, headers=headers, content=content.encode("utf-8"))
        except httpx.TimeoutException as e:
            raise KrakenTransportError(f"Request timeout: {e}") from e
        except httpx.RequestError as e:
            raise KrakenTransportError(f"Request error: {e}") from e

        if response.status_code >= 400:
            raise KrakenTransportError(response.text, status_code=response.status_code)

        logger.debug(
            "Kraken response received",
            extra={"status_code": response.status_code, "size": len(response.content)},
        )
        return response.content

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
