"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → 프로젝트 루트)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent

# 패키지 버전 (User-Agent에 포함)
VERSION: str = "0.1.0"


class KrakenEndpoints:
    """Kraken API 엔드포인트 (고정값)

    공식 문서: https://docs.kraken.com/api/docs/guides/spot-rest-auth
    """

    REST_URL: str = "https://api.kraken.com"
    API_VERSION: int = 0


class Defaults:
    """기본값 상수"""

    # 요청 타임아웃 (초)
    TIMEOUT_SEC: float = 25.0

    USER_AGENT: str = f"kraken-private-client/{VERSION}"

    LOG_LEVEL: str = "INFO"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # 설정 파일
    SECRETS_FILE: Path = CONFIG_DIR / "secrets.yaml"


# 비트코인 표시 티커 (정확히 일치하는 것만 인정, 접두사 규칙 없음)
# XBT.B/XBT.M/XBT.F/XBT.T: 스테이킹/리워드 등 파생 잔고
BTC_TICKERS: frozenset[str] = frozenset(
    {"XBT", "XXBT", "XBT.B", "XBT.M", "XBT.F", "XBT.T"}
)
