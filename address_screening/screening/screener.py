"""
Address screener: two-phase remote lookup for one address.

1. Register:  POST /api/risk/v2/entities {"address": ...}
2. Retrieve:  GET  /api/risk/v2/entities/{address}

screen() never raises for remote trouble. Non-success statuses, transport
faults, timeouts and malformed bodies all become a ScreeningFailure whose
reason lands in the outcome's status; the batch always gets one outcome per
address.
"""

from __future__ import annotations

import asyncio
from urllib.parse import quote

import httpx

from address_screening.config.settings import ScreeningSettings
from address_screening.core.exceptions import RemoteStatusError
from address_screening.screening.models import (
    RiskProfile,
    ScreeningFailure,
    ScreeningOutcome,
    ScreeningResult,
    ScreeningSuccess,
)
from address_screening.screening.remote import describe_error, send
from address_screening.screening_logging import get_logger

logger = get_logger(__name__)


class AddressScreener:
    """Screens single addresses against the entities API using a shared client."""

    def __init__(self, client: httpx.AsyncClient, settings: ScreeningSettings) -> None:
        self._client = client
        self._settings = settings

    async def register(self, address: str) -> None:
        await send(
            self._client,
            "POST",
            self._settings.entities_url,
            timeout=self._settings.request_timeout_sec,
            json={"address": address},
        )

    async def retrieve(self, address: str) -> RiskProfile:
        r = await send(
            self._client,
            "GET",
            f"{self._settings.entities_url}/{quote(address, safe='')}",
            timeout=self._settings.request_timeout_sec,
        )
        return RiskProfile.from_api(r.json())

    async def screen_result(self, address: str) -> ScreeningResult:
        """Register then retrieve; any remote failure becomes ScreeningFailure."""
        try:
            await self.register(address)
            profile = await self.retrieve(address)
        except (RemoteStatusError, httpx.HTTPError, asyncio.TimeoutError, ValueError) as e:
            reason = describe_error(e, self._settings.request_timeout_sec)
            logger.error("screen_address_failed", address=address, reason=reason)
            return ScreeningFailure(reason)
        return ScreeningSuccess(profile)

    async def screen(self, address: str) -> ScreeningOutcome:
        return ScreeningOutcome.from_result(address, await self.screen_result(address))
