"""
Batch scheduler: partition addresses, screen each batch concurrently, write rows.

Batches run strictly one after another. Inside a batch every address is
screened at once (asyncio.gather); the batch size is the only concurrency
bound. Rows are written in input order, one append per batch, and the rate
limiter is consulted between batches.
"""

from __future__ import annotations

import asyncio
import math
import time
from dataclasses import dataclass
from typing import Any, Protocol, Sequence

from address_screening.screening.flattener import flatten
from address_screening.screening.models import ScreeningOutcome
from address_screening.screening.rate_limiter import SlidingWindowRateLimiter
from address_screening.screening_logging import get_logger

logger = get_logger(__name__)


class Screener(Protocol):
    async def screen(self, address: str) -> ScreeningOutcome: ...


class ReportSink(Protocol):
    def write_header(self, fields: Sequence[str]) -> None: ...

    def append_rows(self, rows: Sequence[Sequence[Any]]) -> None: ...


def split_into_batches(addresses: Sequence[str], max_parallelism: int) -> list[list[str]]:
    """
    Partition addresses into consecutive batches.

    size = min(max_parallelism, ceil(N / 2)), so inputs of up to
    2 * max_parallelism addresses yield at most two batches. The last batch
    may be shorter. Empty input yields no batches.
    """
    if max_parallelism < 1:
        raise ValueError(f"max_parallelism must be >= 1, got {max_parallelism}")
    n = len(addresses)
    if n == 0:
        return []
    size = min(max_parallelism, math.ceil(n / 2))
    return [list(addresses[i * size:(i + 1) * size]) for i in range(math.ceil(n / size))]


@dataclass(frozen=True)
class RunSummary:
    batch_count: int
    screened: int
    failed: int
    elapsed_sec: float


class BatchScheduler:
    """Drives sequential batches of concurrent screenings into a report sink."""

    def __init__(
        self,
        screener: Screener,
        rate_limiter: SlidingWindowRateLimiter,
        sink: ReportSink,
        categories: Sequence[str],
        *,
        parallelism: int,
        include_indirect: bool = False,
    ) -> None:
        self._screener = screener
        self._rate_limiter = rate_limiter
        self._sink = sink
        self._categories = tuple(categories)
        self._parallelism = parallelism
        self._include_indirect = include_indirect

    async def process_batch(self, batch: Sequence[str]) -> list[ScreeningOutcome]:
        """Screen every address in the batch concurrently; outcomes keep input order."""
        outcomes = await asyncio.gather(*(self._screener.screen(a) for a in batch))
        rows = [flatten(o, self._categories, self._include_indirect) for o in outcomes]
        self._sink.append_rows(rows)
        return list(outcomes)

    async def run(self, addresses: Sequence[str]) -> RunSummary:
        started = time.perf_counter()
        batches = split_into_batches(addresses, self._parallelism)
        screened = 0
        failed = 0
        for i, batch in enumerate(batches, 1):
            logger.info("screen_batch_started", batch=i, batch_count=len(batches), size=len(batch))
            self._rate_limiter.record_batch_start()
            outcomes = await self.process_batch(batch)
            screened += len(outcomes)
            failed += sum(1 for o in outcomes if not o.is_complete)
            if i < len(batches):
                await self._rate_limiter.await_if_needed()
        elapsed = time.perf_counter() - started
        return RunSummary(
            batch_count=len(batches),
            screened=screened,
            failed=failed,
            elapsed_sec=elapsed,
        )
