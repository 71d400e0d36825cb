"""실패 배치 JSONL 기록 (asyncio 안전)"""

import asyncio
import json
import logging
import time
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class AsyncFailureLogger:
    """
    실패한 배치를 JSONL 파일에 한 줄씩 기록.

    asyncio.Lock으로 여러 워커의 동시 쓰기를 직렬화.
    log_path가 None이거나 enabled=False면 건수만 센다.

    파일 형식 (1줄 = 1 실패 배치):
        {"worker": "worker3", "error_type": "OperationalError",
         "error_message": "...", "timestamp": "...", "count": 10, "names": [...]}
    """

    def __init__(self, log_path: Path | None, enabled: bool = True):
        self.log_path = log_path
        self.enabled = enabled and log_path is not None
        self._lock = asyncio.Lock()
        self._count = 0
        if self.enabled:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)

    async def log_failure(
        self,
        worker: str,
        error: Exception | str,
        data_info: dict[str, Any] | None = None,
    ):
        """실패 배치를 기록."""
        error_type = type(error).__name__ if isinstance(error, Exception) else "str"
        record = {
            "worker": worker,
            "error_type": error_type,
            "error_message": str(error),
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S"),
            **(data_info or {}),
        }
        async with self._lock:
            self._count += 1
            if not self.enabled:
                return
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")

        logger.warning(f"[red]실패 기록[/red] worker={worker} → {self.log_path}")

    @property
    def count(self) -> int:
        return self._count
