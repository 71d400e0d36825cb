"""공용 파이프라인 설정 베이스 클래스"""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class BaseConfig:
    """
    워커 풀 기반 파이프라인의 공통 설정.

    하위 클래스에서 상속하여 파이프라인별 필드를 추가:

        @dataclass
        class IngestConfig(BaseConfig):
            total: int = 10000
            ...

    모든 필드에 기본값이 있으므로 dataclass 상속 시 필드 순서 문제 없음.
    """

    # 처리
    batch_size: int = 64
    workers: int = 4

    # 실패 로깅 (None이면 기록하지 않음)
    log_failures: bool = False
    failure_log_path: Path | None = None
