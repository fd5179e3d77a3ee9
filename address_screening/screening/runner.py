"""
One screening run end to end: catalog -> header -> batches -> summary.

The catalog is resolved before the sink sees anything, so a catalog failure
leaves no report behind.
"""

from __future__ import annotations

from typing import Any, Sequence

from address_screening.config.settings import ScreeningSettings
from address_screening.screening.catalog import CategoryCatalog
from address_screening.screening.flattener import build_header
from address_screening.screening.rate_limiter import SlidingWindowRateLimiter, window_capacity
from address_screening.screening.remote import create_client
from address_screening.screening.scheduler import BatchScheduler, ReportSink, RunSummary
from address_screening.screening.screener import AddressScreener
from address_screening.screening_logging import get_logger

logger = get_logger(__name__)


async def run_screening(
    settings: ScreeningSettings,
    addresses: Sequence[str],
    sink: ReportSink,
    *,
    rate_limiter: SlidingWindowRateLimiter | None = None,
    **client_kwargs: Any,
) -> RunSummary:
    """
    Screen addresses and write the report to sink.

    client_kwargs go to httpx.AsyncClient (tests pass transport=httpx.MockTransport).

    Raises:
        CatalogUnavailable: catalog fetch failed; sink untouched.
    """
    limiter = rate_limiter or SlidingWindowRateLimiter(
        window_capacity(settings.rate_limit, settings.parallelism, settings.requests_per_address)
    )
    async with create_client(settings, **client_kwargs) as client:
        categories = await CategoryCatalog(client, settings).resolve_categories()
        header = build_header(categories, settings.include_indirect)
        sink.write_header(header)
        logger.info("report_created", columns=len(header))
        scheduler = BatchScheduler(
            AddressScreener(client, settings),
            limiter,
            sink,
            categories,
            parallelism=settings.parallelism,
            include_indirect=settings.include_indirect,
        )
        summary = await scheduler.run(addresses)
    logger.info(
        "screen_run_completed",
        batches=summary.batch_count,
        screened=summary.screened,
        failed=summary.failed,
        elapsed_sec=round(summary.elapsed_sec, 1),
    )
    return summary
