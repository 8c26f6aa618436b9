"""
Mock HTTP 전송

테스트용 IHttpTransport 구현.
요청을 기록하고 미리 넣어둔 응답을 순서대로 반환.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from adapters.kraken.errors import KrakenTransportError


@dataclass(frozen=True)
class RecordedRequest:
    """기록된 요청"""

    url: str
    headers: dict[str, str]
    content: str


@dataclass
class MockTransport:
    """Mock 전송

    IHttpTransport Protocol 구현.

    사용 예시:
    ```python
    transport = MockTransport()
    transport.queue_response({"error": [], "result": {"XXBT": "1.0"}})

    client = KrakenRestClient(credentials, transport=transport)
    balance = await client.get_btc_balance()

    assert transport.requests[0].headers["API-Key"] == "key"
    ```
    """

    responses: list[bytes | Exception] = field(default_factory=list)
    requests: list[RecordedRequest] = field(default_factory=list)
    closed: bool = False

    # -------------------------------------------------------------------------
    # 상태 조작 메서드 (테스트용)
    # -------------------------------------------------------------------------

    def queue_response(self, payload: dict[str, Any] | str | bytes) -> None:
        """다음 응답 추가 (dict는 JSON으로 직렬화)"""
        if isinstance(payload, dict):
            payload = json.dumps(payload)
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        self.responses.append(payload)

    def queue_error(self, error: Exception) -> None:
        """다음 요청에서 발생시킬 에러 추가"""
        self.responses.append(error)

    def queue_http_error(self, status_code: int, message: str = "error") -> None:
        """다음 요청에서 HTTP 에러 발생"""
        self.queue_error(KrakenTransportError(message, status_code=status_code))

    @property
    def last_request(self) -> RecordedRequest:
        """마지막 요청"""
        return self.requests[-1]

    # -------------------------------------------------------------------------
    # IHttpTransport 구현
    # -------------------------------------------------------------------------

    async def post(
        self,
        url: str,
        headers: dict[str, str],
        content: str,
    ) -> bytes:
        self.requests.append(
            RecordedRequest(url=url, headers=dict(headers), content=content)
        )

        if not self.responses:
            raise KrakenTransportError("No mock response queued")

        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def close(self) -> None:
        self.closed = True
