"""Tests for the identity provider client."""

import json

import httpx
import pytest

from cronara.integrations.identity_client import IdentityClient
from cronara.models import UserRole


def make_client(handler, max_attempts: int = 3) -> IdentityClient:
    return IdentityClient(
        base_url="https://auth.example.com/",
        service_key="service-key",
        max_attempts=max_attempts,
        backoff_seconds=0,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_mark_onboarding_completed_puts_user_metadata() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"id": "u1"})

    assert await make_client(handler).mark_onboarding_completed("u1", UserRole.OWNER) is True

    [request] = requests
    assert request.method == "PUT"
    assert str(request.url) == "https://auth.example.com/auth/v1/admin/users/u1"
    assert request.headers["apikey"] == "service-key"
    assert request.headers["Authorization"] == "Bearer service-key"
    assert json.loads(request.content) == {
        "user_metadata": {"onboarding_completed": True, "role": "owner"}
    }


@pytest.mark.asyncio
async def test_server_errors_are_retried() -> None:
    attempts = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        if len(attempts) < 3:
            return httpx.Response(503)
        return httpx.Response(200, json={"id": "u1"})

    assert await make_client(handler).mark_onboarding_completed("u1", UserRole.CLIENT) is True
    assert len(attempts) == 3


@pytest.mark.asyncio
async def test_exhausted_retries_report_failure() -> None:
    attempts = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        raise httpx.ConnectError("unreachable", request=request)

    assert await make_client(handler, max_attempts=2).mark_onboarding_completed(
        "u1", UserRole.CLIENT
    ) is False
    assert len(attempts) == 2


@pytest.mark.asyncio
async def test_dev_mode_skips_the_network() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected in dev mode")

    client = IdentityClient(base_url="", service_key="", transport=httpx.MockTransport(handler))

    assert client.dev_mode
    assert await client.mark_onboarding_completed("u1", UserRole.OWNER) is True


@pytest.mark.asyncio
async def test_non_json_success_body_reports_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="ok")

    assert await make_client(handler).mark_onboarding_completed("u1", UserRole.OWNER) is False


@pytest.mark.asyncio
async def test_empty_success_body_counts_as_written() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    assert await make_client(handler).mark_onboarding_completed("u1", UserRole.CLIENT) is True
