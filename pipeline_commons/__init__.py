"""
pipeline-commons — 파이프라인 공용 유틸리티

사용법:
    from pipeline_commons import (
        BaseConfig,
        PipelineStats, timer,
        AsyncFailureLogger,
        setup_logging, get_logger,
    )
"""

from .config import BaseConfig
from .failures import AsyncFailureLogger
from .log import get_logger, setup_logging
from .stats import PipelineStats, timer

__all__ = [
    # Config
    "BaseConfig",
    # Failure log
    "AsyncFailureLogger",
    # Logging
    "setup_logging",
    "get_logger",
    # Stats
    "PipelineStats",
    "timer",
]
