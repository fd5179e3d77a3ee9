"""
Screening engine: catalog resolution, rate limiting, per-address screening,
batch scheduling, and row flattening.
"""

from address_screening.screening.runner import run_screening
from address_screening.screening.scheduler import BatchScheduler, RunSummary, split_into_batches

__all__ = ["BatchScheduler", "RunSummary", "run_screening", "split_into_batches"]
