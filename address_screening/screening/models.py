"""
Data models for address screening.

Responsibilities:
- Normalize the retrieve response into RiskProfile / Exposure.
- Represent each screening as ScreeningSuccess | ScreeningFailure.
- Collapse either result into a uniform ScreeningOutcome (one per address).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

STATUS_COMPLETE = "complete"
DIRECT = "direct"
INDIRECT = "indirect"


@dataclass(frozen=True)
class Exposure:
    """USD exposure of an address to one risk category."""

    category: str | None
    exposure_type: str | None  # direct | indirect; None for keys without indirect access
    value: Any  # passed through verbatim (USD)

    @classmethod
    def from_api_item(cls, item: dict[str, Any]) -> "Exposure":
        """Build from one entry of the retrieve response's exposures list."""
        return cls(
            category=item.get("category"),
            exposure_type=item.get("exposureType"),
            value=item.get("value"),
        )


@dataclass(frozen=True)
class RiskProfile:
    """
    Risk profile returned by the retrieve call.

    Unknown or absent fields stay None; a missing or null cluster leaves
    cluster_category and cluster_name as None.
    """

    risk: Any = None
    risk_reason: str | None = None
    cluster_category: str | None = None
    cluster_name: str | None = None
    exposures: tuple[Exposure, ...] = ()

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "RiskProfile":
        """Build from the retrieve JSON body: {risk, riskReason, cluster, exposures}."""
        if not isinstance(payload, dict):
            raise ValueError(f"risk profile must be a JSON object, got {type(payload).__name__}")
        cluster = payload.get("cluster")
        if not isinstance(cluster, dict):
            cluster = {}
        exposures = payload.get("exposures")
        if not isinstance(exposures, list):
            exposures = []
        return cls(
            risk=payload.get("risk"),
            risk_reason=payload.get("riskReason"),
            cluster_category=cluster.get("category"),
            cluster_name=cluster.get("name"),
            exposures=tuple(Exposure.from_api_item(e) for e in exposures if isinstance(e, dict)),
        )


@dataclass(frozen=True)
class ScreeningSuccess:
    profile: RiskProfile


@dataclass(frozen=True)
class ScreeningFailure:
    reason: str


ScreeningResult = Union[ScreeningSuccess, ScreeningFailure]


@dataclass(frozen=True)
class ScreeningOutcome:
    """
    Uniform record for exactly one screened address.

    status is "complete" on success, otherwise the failure description
    (e.g. "404 Not Found" or a transport/timeout message). On failure every
    other field is None and exposures is empty.
    """

    address: str
    status: str
    risk: Any = None
    risk_reason: str | None = None
    cluster_category: str | None = None
    cluster_name: str | None = None
    exposures: tuple[Exposure, ...] = field(default_factory=tuple)

    @property
    def is_complete(self) -> bool:
        return self.status == STATUS_COMPLETE

    @classmethod
    def from_result(cls, address: str, result: ScreeningResult) -> "ScreeningOutcome":
        if isinstance(result, ScreeningSuccess):
            p = result.profile
            return cls(
                address=address,
                status=STATUS_COMPLETE,
                risk=p.risk,
                risk_reason=p.risk_reason,
                cluster_category=p.cluster_category,
                cluster_name=p.cluster_name,
                exposures=p.exposures,
            )
        return cls(address=address, status=result.reason)
