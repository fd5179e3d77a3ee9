"""
Row flattener: one ScreeningOutcome + category catalog -> one fixed-width row.

Prefix columns are fixed; category columns follow the catalog order, one per
category, or a _direct/_indirect pair per category when indirect exposure is
requested. A category with no matching exposure is None, never zero.
"""

from __future__ import annotations

from typing import Any, Sequence

from address_screening.screening.models import DIRECT, INDIRECT, Exposure, ScreeningOutcome

HEADER_FIELDS = (
    "address",
    "screenStatus",
    "risk",
    "riskReason",
    "category",
    "name",
)


def build_header(categories: Sequence[str], include_indirect: bool = False) -> list[str]:
    """Report header for the given catalog."""
    header = list(HEADER_FIELDS)
    for cat in categories:
        if include_indirect:
            header.extend((f"{cat}_{DIRECT}", f"{cat}_{INDIRECT}"))
        else:
            header.append(cat)
    return header


def _find_value(exposures: Sequence[Exposure], category: str, exposure_type: str | None) -> Any:
    """
    First matching exposure value, or None.

    exposure_type None matches any exposure that is not indirect, so direct-only
    API keys (no exposureType) and indirect-authorized keys share one bucket.
    """
    for e in exposures:
        if e.category != category:
            continue
        if exposure_type is None:
            if e.exposure_type != INDIRECT:
                return e.value
        elif e.exposure_type == exposure_type:
            return e.value
    return None


def flatten(
    outcome: ScreeningOutcome,
    categories: Sequence[str],
    include_indirect: bool = False,
) -> list[Any]:
    """Fields for one report row, aligned with build_header(categories, include_indirect)."""
    row: list[Any] = [
        outcome.address,
        outcome.status,
        outcome.risk,
        outcome.risk_reason,
        outcome.cluster_category,
        outcome.cluster_name,
    ]
    for cat in categories:
        if include_indirect:
            row.append(_find_value(outcome.exposures, cat, DIRECT))
            row.append(_find_value(outcome.exposures, cat, INDIRECT))
        else:
            row.append(_find_value(outcome.exposures, cat, None))
    return row
