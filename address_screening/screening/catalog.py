"""
Category catalog: fetch the current risk-category taxonomy once per run.

The sorted catalog fixes the report's category columns for the whole run, so
any failure here is fatal (CatalogUnavailable) and happens before output exists.
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx

from address_screening.config.settings import ScreeningSettings
from address_screening.core.exceptions import CatalogUnavailable, RemoteStatusError
from address_screening.screening.remote import describe_error, send
from address_screening.screening_logging import get_logger

logger = get_logger(__name__)


def _category_label(item: Any) -> str | None:
    """Catalog entries are plain labels; object entries carry name or category."""
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        label = item.get("name") or item.get("category")
        return str(label) if label else None
    return None


def parse_catalog(payload: Any) -> tuple[str, ...]:
    """Return sorted, de-duplicated category labels from the catalog JSON."""
    if not isinstance(payload, list):
        raise CatalogUnavailable(
            f"Error getting categories:  expected a JSON list, got {type(payload).__name__}"
        )
    labels = {label for label in (_category_label(i) for i in payload) if label}
    return tuple(sorted(labels))


class CategoryCatalog:
    """Resolves the category taxonomy from the remote service."""

    def __init__(self, client: httpx.AsyncClient, settings: ScreeningSettings) -> None:
        self._client = client
        self._settings = settings

    async def resolve_categories(self) -> tuple[str, ...]:
        """
        Fetch and sort the category catalog.

        Raises:
            CatalogUnavailable: non-success status, transport fault, timeout,
                or a payload that is not a list of categories.
        """
        logger.info("catalog_fetch_started", url=self._settings.catalog_url)
        timeout = self._settings.request_timeout_sec
        try:
            r = await send(self._client, "GET", self._settings.catalog_url, timeout=timeout)
            payload = r.json()
        except (RemoteStatusError, httpx.HTTPError, asyncio.TimeoutError, ValueError) as e:
            raise CatalogUnavailable(f"Error getting categories:  {describe_error(e, timeout)}") from e
        categories = parse_catalog(payload)
        logger.info("catalog_resolved", category_count=len(categories))
        return categories
