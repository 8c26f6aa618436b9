"""
설정 로더

secrets.yaml 로드 및 클라이언트 설정 생성
"""

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from adapters.kraken.auth import KrakenCredentials
from core.config.client import ClientConfig
from core.constants import Paths


@dataclass(frozen=True)
class Secrets:
    """보안 설정 (secrets.yaml에서 로드)

    키가 설정되지 않은 경우 api_key/api_secret은 None.
    """

    api_key: str | None = None
    api_secret: str | None = field(default=None, repr=False)

    @property
    def has_credentials(self) -> bool:
        """API 키 설정 여부"""
        return bool(self.api_key and self.api_secret)

    @property
    def credentials(self) -> KrakenCredentials | None:
        """인증 정보 (없으면 None)"""
        if not self.has_credentials:
            return None
        assert self.api_key is not None and self.api_secret is not None
        return KrakenCredentials(key=self.api_key, secret=self.api_secret)


class SecretsLoadError(Exception):
    """Secrets 로드 실패 예외"""

    pass


def load_secrets(path: Path | None = None) -> Secrets:
    """secrets.yaml 파일 로드

    Args:
        path: secrets.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Secrets 인스턴스 (kraken 섹션이 없으면 인증 정보 없음)

    Raises:
        SecretsLoadError: 파일이 없거나 형식이 잘못된 경우
    """
    if path is None:
        path = Paths.SECRETS_FILE

    if not path.exists():
        raise SecretsLoadError(f"secrets.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SecretsLoadError(f"secrets.yaml 파싱 실패: {e}") from e

    if data is None:
        raise SecretsLoadError("secrets.yaml이 비어 있습니다")

    if not isinstance(data, dict):
        raise SecretsLoadError("secrets.yaml 최상위는 매핑이어야 합니다")

    kraken_config = data.get("kraken")
    if kraken_config is None:
        return Secrets()

    if not isinstance(kraken_config, dict):
        raise SecretsLoadError("secrets.yaml의 'kraken' 섹션은 매핑이어야 합니다")

    api_key = kraken_config.get("api_key") or None
    api_secret = kraken_config.get("api_secret") or None

    # 한쪽만 설정된 경우는 설정 실수로 간주
    if api_key and not api_secret:
        raise SecretsLoadError(
            "secrets.yaml의 kraken 섹션에 'api_secret'가 없습니다"
        )
    if api_secret and not api_key:
        raise SecretsLoadError(
            "secrets.yaml의 kraken 섹션에 'api_key'가 없습니다"
        )

    return Secrets(
        api_key=str(api_key) if api_key else None,
        api_secret=str(api_secret) if api_secret else None,
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    secrets.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _secrets: Secrets | None = None

    def __new__(cls, secrets_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, secrets_path: Path | None = None) -> None:
        if self._secrets is None:
            self._secrets = load_secrets(secrets_path)

    @property
    def secrets(self) -> Secrets:
        """로드된 Secrets"""
        assert self._secrets is not None
        return self._secrets

    @property
    def credentials(self) -> KrakenCredentials | None:
        """Kraken 인증 정보"""
        return self.secrets.credentials

    @property
    def client_config(self) -> ClientConfig:
        """기본 클라이언트 설정"""
        return ClientConfig()

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._secrets = None


def get_settings(secrets_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        secrets_path: secrets.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(secrets_path)
