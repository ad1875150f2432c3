"""Tests for the profile import service client."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from linkedin_import.client import ProfileClient
from linkedin_import.errors import ProfileFetchError

ENDPOINT = "http://import.test/api/linkedin/import"


def make_client(handler) -> ProfileClient:
    return ProfileClient(endpoint=ENDPOINT, timeout=1, transport=httpx.MockTransport(handler))


def test_fetch_profile_posts_url() -> None:
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json={"personalInfo": {"firstName": "Ada"}})

    payload = asyncio.run(make_client(handler).fetch_profile("https://linkedin.com/in/ada"))
    assert seen == [{"profileUrl": "https://linkedin.com/in/ada"}]
    assert payload["personalInfo"]["firstName"] == "Ada"


def test_fetch_profile_unwraps_data_envelope() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": True, "data": {"skills": ["Python"]}})

    payload = asyncio.run(make_client(handler).fetch_profile("https://linkedin.com/in/ada"))
    assert payload == {"skills": ["Python"]}


def test_http_error_names_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": "Profile not found"})

    with pytest.raises(ProfileFetchError) as excinfo:
        asyncio.run(make_client(handler).fetch_profile("https://linkedin.com/in/ghost"))
    assert excinfo.value.status_code == 404
    assert str(excinfo.value) == "404 Not Found: Profile not found"


def test_transport_error_is_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ProfileFetchError, match="^Network error"):
        asyncio.run(make_client(handler).fetch_profile("https://linkedin.com/in/ada"))


def test_non_object_response() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=["not", "a", "profile"])

    with pytest.raises(ProfileFetchError):
        asyncio.run(make_client(handler).fetch_profile("https://linkedin.com/in/ada"))
