"""
pytest 공통 fixture 정의

secrets.yaml 로드 테스트용 임시 파일 fixture
"""

import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_secrets_file(temp_dir: Path) -> Path:
    """테스트용 secrets.yaml 파일 생성"""
    secrets_content = """# 테스트용 secrets.yaml
kraken:
  api_key: "test_api_key_abcde"
  api_secret: "dGVzdF9zZWNyZXQ="
"""
    secrets_path = temp_dir / "secrets.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path


@pytest.fixture
def temp_secrets_file_without_kraken(temp_dir: Path) -> Path:
    """kraken 섹션이 없는 secrets.yaml 파일 생성"""
    secrets_content = """other:
  value: 1
"""
    secrets_path = temp_dir / "secrets_no_kraken.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path


@pytest.fixture
def temp_secrets_file_missing_secret(temp_dir: Path) -> Path:
    """api_secret이 빠진 secrets.yaml 파일 생성"""
    secrets_content = """kraken:
  api_key: "test_api_key_abcde"
"""
    secrets_path = temp_dir / "secrets_missing_secret.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path
