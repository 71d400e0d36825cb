"""
벌크 적재 파이프라인 — 고정 워커 풀 + 닫을 수 있는 큐 + join 배리어

    producer ──put──▶ asyncio.Queue ──get──▶ worker1 .. workerN ──▶ store.create_businesses(batch)
                      (엔티티 전부 + 워커 수만큼 종료 마커)

- 큐 용량 = 엔티티 수 + 워커 수 → producer는 절대 대기하지 않음
- 종료 신호는 종료 마커(_CLOSED) 하나뿐. 워커는 마커를 받으면 남은 배치를 flush하고 종료
- 워커는 처리한 모든 엔티티의 worker_name에 자기 라벨을 기록
- 배치 INSERT 실패 시 해당 워커만 즉시 종료 (재시도 없음, 롤백 없음)
- cancel 이벤트는 매 수신 / 매 flush 직전에 확인
- 모든 워커가 끝난 뒤(asyncio.gather) IngestionReport 반환
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol, Sequence

from pipeline_commons import AsyncFailureLogger, PipelineStats, timer

from .config import IngestConfig
from .models import Business

logger = logging.getLogger(__name__)

_CLOSED = object()


class BatchStore(Protocol):
    async def create_businesses(self, businesses: Sequence[Business]) -> int: ...


# ============================================================
# 결과 타입
# ============================================================

@dataclass
class WorkerOutcome:
    """워커 1개의 처리 결과."""

    worker: str
    received: int = 0
    persisted: int = 0
    batches: list[int] = field(default_factory=list)  # flush 성공한 배치 크기 (순서대로)
    dropped: int = 0                                   # 받았지만 저장하지 못한 건수
    error: Exception | None = None
    cancelled: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.cancelled


@dataclass
class IngestionReport:
    total: int
    outcomes: list[WorkerOutcome]
    wall_sec: float = 0.0
    cancelled: bool = False

    @property
    def persisted(self) -> int:
        return sum(o.persisted for o in self.outcomes)

    @property
    def failed_workers(self) -> list[str]:
        return [o.worker for o in self.outcomes if o.error is not None]

    @property
    def complete(self) -> bool:
        return not self.cancelled and not self.failed_workers and self.persisted == self.total


# ============================================================
# 워커
# ============================================================

async def _flush(
    label: str,
    batch: list[Business],
    store: BatchStore,
    outcome: WorkerOutcome,
    stats: PipelineStats,
    failure_logger: AsyncFailureLogger | None,
) -> bool:
    try:
        with timer() as t:
            await store.create_businesses(batch)
    except Exception as e:
        outcome.error = e
        outcome.dropped += len(batch)
        stats.record_failure(len(batch))
        logger.error(f"[{label}] 배치 INSERT 실패 ({len(batch)}건), 워커 종료: {e}")
        if failure_logger is not None:
            await failure_logger.log_failure(
                label, e, {"count": len(batch), "names": [b.name for b in batch]}
            )
        return False

    outcome.persisted += len(batch)
    outcome.batches.append(len(batch))
    stats.update(len(batch), worker=label, insert_ms=t.ms)
    return True


async def _worker(
    label: str,
    queue: asyncio.Queue,
    store: BatchStore,
    batch_size: int,
    stats: PipelineStats,
    cancel: asyncio.Event | None,
    failure_logger: AsyncFailureLogger | None,
) -> WorkerOutcome:
    outcome = WorkerOutcome(worker=label)
    batch: list[Business] = []

    def _stop_cancelled() -> WorkerOutcome:
        outcome.cancelled = True
        outcome.dropped += len(batch)
        logger.warning(f"[{label}] 취소됨 (미저장 {len(batch)}건)")
        return outcome

    while True:
        if cancel is not None and cancel.is_set():
            return _stop_cancelled()

        item = await queue.get()
        if item is _CLOSED:
            break

        item.worker_name = label
        batch.append(item)
        outcome.received += 1

        if len(batch) >= batch_size:
            if cancel is not None and cancel.is_set():
                return _stop_cancelled()
            if not await _flush(label, batch, store, outcome, stats, failure_logger):
                return outcome
            batch = []

    # 큐 종료 후 남은 부분 배치
    if batch:
        if cancel is not None and cancel.is_set():
            return _stop_cancelled()
        await _flush(label, batch, store, outcome, stats, failure_logger)

    return outcome


# ============================================================
# Public API
# ============================================================

async def run_ingestion(
    entities: Sequence[Business],
    store: BatchStore,
    config: IngestConfig,
    *,
    cancel: asyncio.Event | None = None,
    failure_logger: AsyncFailureLogger | None = None,
) -> IngestionReport:
    """
    entities를 config.workers개 워커로 나눠 config.batch_size 단위로 저장.

    Args:
        entities:       저장할 Business 목록 (worker_name은 워커가 채움)
        store:          create_businesses(batch)를 제공하는 저장소
        config:         워커 수 / 배치 크기 / 라벨 접두어 / 로그 간격
        cancel:         설정되면 워커가 다음 수신·flush 경계에서 중단
        failure_logger: 실패 배치 JSONL 기록 (선택)

    Returns:
        IngestionReport — 모든 워커 종료 후의 집계 결과
    """
    if config.workers < 1:
        raise ValueError(f"workers must be >= 1, got {config.workers}")
    if config.batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {config.batch_size}")

    total = len(entities)
    queue: asyncio.Queue = asyncio.Queue(maxsize=total + config.workers)
    stats = PipelineStats(total, log_interval=config.log_interval)

    logger.info(
        f"벌크 적재 시작: {total:,}건 "
        f"(workers={config.workers}, batch={config.batch_size})"
    )

    tasks = [
        asyncio.create_task(
            _worker(
                f"{config.worker_prefix}{n}",
                queue,
                store,
                config.batch_size,
                stats,
                cancel,
                failure_logger,
            )
        )
        for n in range(1, config.workers + 1)
    ]

    for entity in entities:
        queue.put_nowait(entity)
    for _ in range(config.workers):
        queue.put_nowait(_CLOSED)

    outcomes = await asyncio.gather(*tasks)

    report = IngestionReport(
        total=total,
        outcomes=list(outcomes),
        wall_sec=stats.wall_sec,
        cancelled=cancel is not None and cancel.is_set(),
    )

    if report.complete:
        logger.info(
            f"벌크 적재 완료: [green]{report.persisted:,}/{total:,}[/green]건 "
            f"({report.wall_sec:.2f}초, {stats.avg_rps:,.0f} rows/s)"
        )
    else:
        logger.warning(
            f"벌크 적재 부분 완료: [yellow]{report.persisted:,}/{total:,}[/yellow]건 "
            f"실패 워커={report.failed_workers or '-'} 취소={report.cancelled}"
        )
    return report
