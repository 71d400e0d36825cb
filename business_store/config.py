"""관계형 저장소 + 벌크 적재 설정"""

from dataclasses import dataclass

from pipeline_commons import BaseConfig

# 합성 데이터의 업종 태그
BUSINESS_TYPES = ("type1", "type2", "type3")


@dataclass
class StoreConfig:
    database_url: str = "sqlite+aiosqlite:///./business.db"
    echo: bool = False
    timeout: float = 30.0   # 어댑터가 직접 여는 세션의 제한 시간 (초)
    pool_size: int = 20     # 벌크 워커 수 이상이어야 함
    max_overflow: int = 10


@dataclass
class IngestConfig(BaseConfig):
    # BaseConfig 기본값 오버라이드 (소량 배치 × 다수 워커)
    batch_size: int = 10
    workers: int = 20

    total: int = 10000              # 생성할 Business 수
    worker_prefix: str = "worker"   # 워커 라벨: worker1 .. workerN
    log_interval: int = 1000        # 진행 로그 간격 (건)
