"""
Pytest fixtures for address screening tests.

FakeRiskApi serves the catalog, register and retrieve endpoints through
httpx.MockTransport, so no test touches the network.
"""

from __future__ import annotations

import json
import os
from typing import Any, Callable

import httpx
import pytest

from address_screening.config.settings import ScreeningSettings
from address_screening.screening_logging import configure_logging

CATALOG_PATH = "/api/v2/categories"
ENTITIES_PATH = "/api/risk/v2/entities"


class FakeRiskApi:
    """
    In-memory risk service.

    profiles: address -> retrieve JSON body (default: low risk, no exposures).
    register_status / retrieve_status: address -> HTTP status to answer with.
    errors: address -> callable(request) raising a transport error on register.
    """

    def __init__(
        self,
        categories: list[Any] | None = None,
        *,
        catalog_status: int = 200,
        profiles: dict[str, dict[str, Any]] | None = None,
        register_status: dict[str, int] | None = None,
        retrieve_status: dict[str, int] | None = None,
        errors: dict[str, Callable[[httpx.Request], Any]] | None = None,
    ) -> None:
        self.categories = categories if categories is not None else ["mixing", "exchange"]
        self.catalog_status = catalog_status
        self.profiles = profiles or {}
        self.register_status = register_status or {}
        self.retrieve_status = retrieve_status or {}
        self.errors = errors or {}
        self.requests: list[httpx.Request] = []

    def calls(self, method: str | None = None) -> list[str]:
        return [r.url.path for r in self.requests if method is None or r.method == method]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path == CATALOG_PATH:
            if self.catalog_status != 200:
                return httpx.Response(self.catalog_status)
            return httpx.Response(200, json=self.categories)
        if request.method == "POST" and path == ENTITIES_PATH:
            address = json.loads(request.content)["address"]
            if address in self.errors:
                self.errors[address](request)
            return httpx.Response(self.register_status.get(address, 201), json={"address": address})
        if request.method == "GET" and path.startswith(ENTITIES_PATH + "/"):
            address = path[len(ENTITIES_PATH) + 1:]
            status = self.retrieve_status.get(address, 200)
            if status != 200:
                return httpx.Response(status)
            body = self.profiles.get(address, {"risk": "Low", "riskReason": None, "cluster": None, "exposures": []})
            return httpx.Response(200, json=body)
        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class MemorySink:
    """Report sink that keeps the header and every append call in memory."""

    def __init__(self) -> None:
        self.header: list[str] | None = None
        self.appends: list[list[list[Any]]] = []

    def write_header(self, fields):
        self.header = list(fields)

    def append_rows(self, rows):
        self.appends.append([list(r) for r in rows])

    @property
    def rows(self) -> list[list[Any]]:
        return [row for batch in self.appends for row in batch]


@pytest.fixture
def settings() -> ScreeningSettings:
    return ScreeningSettings(
        api_key="test-key",
        api_host="https://api.test",
        catalog_url="https://reactor.test/api/v2/categories",
        parallelism=10,
        rate_limit=3800,
        request_timeout_sec=5.0,
    )


@pytest.fixture
def fake_api() -> FakeRiskApi:
    return FakeRiskApi()


@pytest.fixture
def memory_sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Unset screening env vars and run from an empty directory (no stray .env).

    os.environ is swapped for a copy so values loaded from a test .env do not leak.
    """
    monkeypatch.setattr(os, "environ", os.environ.copy())
    for name in (
        "API_KEY",
        "SCREENING_API_HOST",
        "SCREENING_CATALOG_URL",
        "SCREENING_AUTH_HEADER",
        "SCREENING_RATE_LIMIT",
        "SCREENING_PARALLELISM",
        "SCREENING_REQUEST_TIMEOUT_SEC",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def make_api() -> Callable[..., FakeRiskApi]:
    """Factory for FakeRiskApi with custom behavior."""
    return FakeRiskApi


@pytest.fixture(autouse=True)
def default_logging():
    """Restore the default logging configuration after each test."""
    yield
    configure_logging()
