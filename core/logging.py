"""
로깅 설정

예제 스크립트용. 라이브러리 코드는 모듈 로거만 사용하고 핸들러를 붙이지 않음.

    from core.logging import setup_logging
    setup_logging("show_balances")
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.constants import Paths


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# httpx는 INFO로 요청 URL을 남기므로 WARNING으로 올림
QUIET_LOGGERS = ("httpx", "httpcore")


def _file_handler(process_name: str, log_dir: Path) -> TimedRotatingFileHandler:
    """자정마다 교체되는 <process_name>.log 핸들러 (7일 보관)"""
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = TimedRotatingFileHandler(
        log_dir / f"{process_name}.log",
        when="midnight",
        backupCount=7,
        encoding="utf-8",
    )
    handler.suffix = "%Y-%m-%d"
    return handler


def setup_logging(
    process_name: str,
    level: int = logging.INFO,
    log_dir: Path | None = None,
) -> logging.Logger:
    """루트 로거에 콘솔/파일 핸들러 설치

    다시 호출하면 이전 핸들러를 닫고 교체함.

    Args:
        process_name: 로그 파일 이름
        level: 두 핸들러 공통 레벨 (DEBUG면 클라이언트 요청 흐름까지 출력)
        log_dir: 로그 디렉토리 (None이면 Paths.LOGS_DIR)
    """
    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    for handler in (
        logging.StreamHandler(sys.stdout),
        _file_handler(process_name, log_dir or Paths.LOGS_DIR),
    ):
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root
