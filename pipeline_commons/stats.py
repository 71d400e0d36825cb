"""파이프라인 진행 통계 + 타이머"""

import logging
import threading
import time
from contextlib import contextmanager
from typing import Callable, Generator

logger = logging.getLogger(__name__)


class TimerResult:
    """타이머 결과. with 블록 종료 후 .ms, .sec 참조."""

    __slots__ = ("ms", "sec")

    def __init__(self):
        self.ms: float = 0.0
        self.sec: float = 0.0


@contextmanager
def timer() -> Generator[TimerResult, None, None]:
    """
    소요 시간 측정 컨텍스트 매니저.

        with timer() as t:
            await store.create_businesses(batch)
        stats.update(len(batch), worker="worker1", insert_ms=t.ms)
    """
    result = TimerResult()
    start = time.perf_counter()
    try:
        yield result
    finally:
        result.sec = time.perf_counter() - start
        result.ms = result.sec * 1000


class PipelineStats:
    """
    워커 풀 파이프라인 진행 통계.

    워커 라벨별 처리 건수와 이름별 누적 소요 시간을 함께 기록:
        stats.update(10, worker="worker3", insert_ms=12.5)

    옵션:
        on_update:    업데이트마다 호출될 콜백
        log_fn:       로그 함수 (기본: logger.info)
        log_interval: 로그 출력 간격 (처리 건수 기준, 기본: 1000)
        unit:         처리량 단위 (기본: "rows/s")
    """

    def __init__(
        self,
        total: int,
        *,
        on_update: Callable[["PipelineStats", int, dict[str, float]], None] | None = None,
        log_fn: Callable[..., None] | None = None,
        log_interval: int = 1000,
        unit: str = "rows/s",
    ):
        self.total = total
        self.processed = 0
        self.failed_count = 0
        self.failed_batches = 0
        self.by_worker: dict[str, int] = {}

        self._timings: dict[str, float] = {}
        self._lock = threading.Lock()
        self._start = time.perf_counter()
        self._last_logged = 0

        self._on_update = on_update
        self._log_fn = log_fn or logger.info
        self._log_interval = log_interval
        self._unit = unit

    def update(self, count: int, worker: str | None = None, **timing_ms: float):
        """
        처리 완료 기록.

        Args:
            count:  처리된 항목 수
            worker: 처리한 워커 라벨 (선택)
            **timing_ms: 이름별 소요 시간 (ms), 예: insert_ms=12.5
        """
        with self._lock:
            self.processed += count
            if worker is not None:
                self.by_worker[worker] = self.by_worker.get(worker, 0) + count
            for key, val in timing_ms.items():
                self._timings[key] = self._timings.get(key, 0.0) + val
            n = self.processed

        if self._on_update:
            self._on_update(self, count, timing_ms)

        self._maybe_log(n, timing_ms)

    def record_failure(self, doc_count: int):
        """최종 실패 배치 기록."""
        with self._lock:
            self.failed_count += doc_count
            self.failed_batches += 1

    def get_timing(self, key: str) -> float:
        """특정 타이밍의 누적값 (ms) 반환."""
        with self._lock:
            return self._timings.get(key, 0.0)

    @property
    def wall_sec(self) -> float:
        return time.perf_counter() - self._start

    @property
    def avg_rps(self) -> float:
        w = self.wall_sec
        return self.processed / w if w > 0 else 0.0

    def _maybe_log(self, n: int, last_timing: dict[str, float]):
        # 배치 크기가 간격의 약수가 아닐 수 있으므로 구간 경계를 넘었는지로 판단
        with self._lock:
            crossed = n // self._log_interval > self._last_logged // self._log_interval
            if not (crossed or n == self.total):
                return
            self._last_logged = n

        pct = n / self.total * 100 if self.total > 0 else 0
        timing_parts = "  ".join(
            f"{k}=[cyan]{v:.0f}ms[/cyan]" for k, v in last_timing.items()
        )
        self._log_fn(
            f"[bold]\\[{pct:5.1f}%][/bold] {n:>7,}/{self.total:,}  "
            f"{timing_parts}  "
            f"avg=[green]{self.avg_rps:.0f} {self._unit}[/green]"
        )
