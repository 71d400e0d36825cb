"""
로깅 설정: 패키지 루트 로거마다 RichHandler(콘솔), 선택적으로 파일 하나를 공유.

    setup_logging(log_file=Path("logs/ingest.log"), level="DEBUG")
    get_logger("business_store", "ingest").info("[green]적재 완료[/green]")

파일에는 Rich markup을 벗긴 평문이 남는다.
"""

import logging
from pathlib import Path
from typing import Iterable

from rich.logging import RichHandler
from rich.text import Text

DEFAULT_PACKAGES = ("pipeline_commons", "business_store", "business_search", "business_api")

FILE_FORMAT = "%(asctime)s  %(name)s  %(levelname)s  %(message)s"


class _PlainFormatter(logging.Formatter):
    """markup 태그 제거 후 포맷. 레코드 자체는 건드리지 않는다."""

    def format(self, record: logging.LogRecord) -> str:
        markup = record.msg
        try:
            record.msg = Text.from_markup(str(markup)).plain
        except (ValueError, KeyError, AttributeError):
            pass
        try:
            return super().format(record)
        finally:
            record.msg = markup


def _level(level: int | str) -> int:
    return logging.getLevelName(level.upper()) if isinstance(level, str) else level


def _file_handler(log_file: Path, level: int) -> logging.FileHandler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(_PlainFormatter(FILE_FORMAT))
    handler.setLevel(level)
    return handler


def setup_logging(
    packages: Iterable[str] = DEFAULT_PACKAGES,
    log_file: Path | None = None,
    level: int | str = logging.INFO,
) -> list[logging.Logger]:
    """
    Args:
        packages: 핸들러를 붙일 패키지 루트 로거 이름
        log_file: 주어지면 모든 패키지가 같은 파일 핸들러에 기록
        level:    int 또는 "INFO" 같은 이름

    여러 번 호출해도 RichHandler는 로거당 하나.
    """
    level = _level(level)
    shared_file = _file_handler(log_file, level) if log_file else None

    configured = []
    for name in packages:
        pkg_logger = logging.getLogger(name)
        pkg_logger.setLevel(level)
        if not any(isinstance(h, RichHandler) for h in pkg_logger.handlers):
            console = RichHandler(
                rich_tracebacks=True,
                show_path=False,
                markup=True,
                log_time_format="[%H:%M:%S]",
            )
            console.setLevel(level)
            pkg_logger.addHandler(console)
        if shared_file is not None:
            pkg_logger.addHandler(shared_file)
        configured.append(pkg_logger)
    return configured


def get_logger(pkg_name: str, name: str | None = None) -> logging.Logger:
    """get_logger("business_store", "ingest") → "business_store.ingest" 로거"""
    return logging.getLogger(f"{pkg_name}.{name}" if name else pkg_name)
