"""
클라이언트 고정 설정

API 루트 URL, 버전, User-Agent, BTC 티커 목록 등 프로세스 전역 상수를
전역 상태 대신 생성 시점에 주입하기 위한 불변 설정 객체.
"""

from dataclasses import dataclass

from core.constants import BTC_TICKERS, Defaults, KrakenEndpoints
from core.types import PostDataEncoding


@dataclass(frozen=True)
class ClientConfig:
    """Kraken 클라이언트 설정

    불변 데이터 구조로 설정 변경 방지
    """

    root_url: str = KrakenEndpoints.REST_URL
    api_version: int = KrakenEndpoints.API_VERSION
    user_agent: str = Defaults.USER_AGENT
    timeout: float = Defaults.TIMEOUT_SEC
    btc_tickers: frozenset[str] = BTC_TICKERS
    post_data_encoding: PostDataEncoding = PostDataEncoding.JSON

    def private_path(self, method: str) -> str:
        """Private API 경로 (예: /0/private/Balance)"""
        return f"/{self.api_version}/private/{method}"

    def private_url(self, method: str) -> str:
        """Private API 전체 URL"""
        return f"{self.root_url.rstrip('/')}{self.private_path(method)}"
