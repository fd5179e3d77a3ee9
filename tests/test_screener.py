"""
Tests for AddressScreener with a mocked risk API (httpx.MockTransport).

Every remote failure must come back as an outcome, never as an exception.
"""

from __future__ import annotations

import asyncio
import dataclasses
import json

import httpx

from address_screening.screening.models import Exposure, ScreeningFailure, ScreeningSuccess
from address_screening.screening.remote import create_client
from address_screening.screening.screener import AddressScreener

PROFILE = {
    "address": "0xAAA",
    "risk": "Severe",
    "riskReason": "Identified as sanctioned entity",
    "cluster": {"category": "sanctioned entity", "name": "Bad Actor"},
    "exposures": [
        {"category": "mixing", "exposureType": "direct", "value": 100},
        {"category": "mixing", "exposureType": "indirect", "value": 250.5},
    ],
}


def _screen(settings, transport, address):
    async def go():
        async with create_client(settings, transport=transport) as client:
            return await AddressScreener(client, settings).screen(address)

    return asyncio.run(go())


def test_screen_success_populates_outcome(settings, make_api):
    api = make_api(profiles={"0xAAA": PROFILE})
    outcome = _screen(settings, api.transport, "0xAAA")

    assert outcome.status == "complete"
    assert outcome.is_complete
    assert outcome.address == "0xAAA"
    assert outcome.risk == "Severe"
    assert outcome.risk_reason == "Identified as sanctioned entity"
    assert outcome.cluster_category == "sanctioned entity"
    assert outcome.cluster_name == "Bad Actor"
    assert outcome.exposures == (
        Exposure("mixing", "direct", 100),
        Exposure("mixing", "indirect", 250.5),
    )


def test_register_then_retrieve_in_order_with_auth_header(settings, make_api):
    api = make_api()
    _screen(settings, api.transport, "0xAAA")

    assert [(r.method, r.url.path) for r in api.requests] == [
        ("POST", "/api/risk/v2/entities"),
        ("GET", "/api/risk/v2/entities/0xAAA"),
    ]
    assert json.loads(api.requests[0].content) == {"address": "0xAAA"}
    assert all(r.headers["token"] == "test-key" for r in api.requests)


def test_custom_auth_header_name(settings, make_api):
    api = make_api()
    custom = dataclasses.replace(settings, auth_header="X-API-Key")
    _screen(custom, api.transport, "0xAAA")
    assert api.requests[0].headers["X-API-Key"] == "test-key"


def test_missing_cluster_and_exposures_stay_empty(settings, make_api):
    api = make_api(profiles={"0xAAA": {"risk": "Low"}})
    outcome = _screen(settings, api.transport, "0xAAA")
    assert outcome.status == "complete"
    assert outcome.cluster_category is None
    assert outcome.cluster_name is None
    assert outcome.risk_reason is None
    assert outcome.exposures == ()


def test_register_failure_skips_retrieve(settings, make_api):
    api = make_api(register_status={"0xAAA": 403})
    outcome = _screen(settings, api.transport, "0xAAA")

    assert outcome.status == "403 Forbidden"
    assert outcome.risk is None
    assert outcome.exposures == ()
    assert api.calls("GET") == []


def test_retrieve_failure_status(settings, make_api):
    api = make_api(retrieve_status={"0xAAA": 404})
    outcome = _screen(settings, api.transport, "0xAAA")
    assert outcome.status == "404 Not Found"
    assert not outcome.is_complete
    assert outcome.cluster_name is None


def test_transport_fault_becomes_failure(settings, make_api):
    def refuse(request):
        raise httpx.ConnectError("Connection refused", request=request)

    api = make_api(errors={"0xAAA": refuse})
    outcome = _screen(settings, api.transport, "0xAAA")
    assert outcome.status == "Connection refused"
    assert outcome.exposures == ()


def test_transport_fault_without_message_uses_type_name(settings, make_api):
    def fail(request):
        raise httpx.ReadError("", request=request)

    api = make_api(errors={"0xAAA": fail})
    assert _screen(settings, api.transport, "0xAAA").status == "ReadError"


def test_slow_response_times_out(settings):
    async def slow(request):
        await asyncio.sleep(1.0)
        return httpx.Response(201)

    quick = dataclasses.replace(settings, request_timeout_sec=0.05)
    outcome = _screen(quick, httpx.MockTransport(slow), "0xAAA")
    assert outcome.status == "Request timed out after 0.05s"
    assert outcome.risk is None


def test_malformed_retrieve_body_becomes_failure(settings):
    def handler(request):
        if request.method == "POST":
            return httpx.Response(201)
        return httpx.Response(200, content=b"not json")

    outcome = _screen(settings, httpx.MockTransport(handler), "0xAAA")
    assert not outcome.is_complete
    assert outcome.status


def test_non_object_retrieve_body_becomes_failure(settings):
    def handler(request):
        if request.method == "POST":
            return httpx.Response(201)
        return httpx.Response(200, json=["unexpected"])

    outcome = _screen(settings, httpx.MockTransport(handler), "0xAAA")
    assert outcome.status == "risk profile must be a JSON object, got list"


def test_screen_result_sum_type(settings, make_api):
    api = make_api(retrieve_status={"0xBBB": 500})

    async def go():
        async with create_client(settings, transport=api.transport) as client:
            screener = AddressScreener(client, settings)
            return await screener.screen_result("0xAAA"), await screener.screen_result("0xBBB")

    ok, failed = asyncio.run(go())
    assert isinstance(ok, ScreeningSuccess)
    assert ok.profile.risk == "Low"
    assert failed == ScreeningFailure("500 Internal Server Error")


def test_redirected_retrieve_is_followed(settings, make_api):
    api = make_api(profiles={"0xAAA": PROFILE})

    def handler(request):
        if request.method == "GET" and request.url.host == "api.test":
            return httpx.Response(307, headers={"Location": f"https://mirror.test{request.url.path}"})
        return api.handler(request)

    outcome = _screen(settings, httpx.MockTransport(handler), "0xAAA")
    assert outcome.is_complete
    assert outcome.risk == "Severe"
