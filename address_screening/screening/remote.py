"""
Shared httpx plumbing for the remote risk service.

One AsyncClient per run: pool sized to the batch parallelism, auth header and
timeout on every request, redirects followed. send() turns a non-success
status into RemoteStatusError and bounds each call with asyncio.wait_for as
well as the httpx timeout, so a trickling response cannot hold a batch open.
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx

from address_screening.config.settings import ScreeningSettings
from address_screening.core.exceptions import RemoteStatusError


def create_client(settings: ScreeningSettings, **kwargs: Any) -> httpx.AsyncClient:
    """AsyncClient for one run. Extra kwargs (e.g. transport=) go to httpx."""
    limits = httpx.Limits(
        max_connections=settings.parallelism,
        max_keepalive_connections=settings.parallelism,
    )
    return httpx.AsyncClient(
        headers=settings.headers,
        timeout=httpx.Timeout(settings.request_timeout_sec),
        limits=limits,
        follow_redirects=True,
        **kwargs,
    )


async def send(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    timeout: float,
    **kwargs: Any,
) -> httpx.Response:
    """
    Send one request; return the response only if its status is 2xx.

    Raises:
        RemoteStatusError: non-success status ("<code> <reason phrase>").
        httpx.HTTPError: transport fault (including httpx timeouts).
        asyncio.TimeoutError: the call did not finish within timeout seconds.
    """
    r = await asyncio.wait_for(client.request(method, url, **kwargs), timeout=timeout)
    if not r.is_success:
        raise RemoteStatusError(r.status_code, r.reason_phrase)
    return r


def describe_error(exc: BaseException, timeout: float | None = None) -> str:
    """Human-readable failure description; falls back to the exception type for empty messages."""
    if isinstance(exc, asyncio.TimeoutError):
        return f"Request timed out after {timeout:g}s" if timeout else "Request timed out"
    text = str(exc).strip()
    return text or type(exc).__name__
