from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi import HTTPException

from analytics_api.errors import InvalidResponseError, RecordNotFoundError
from analytics_api.utils import host_api

from ..utils import http_response

USER_URL = "http://host.test/auth/user"


@pytest.mark.asyncio
async def test_who_am_i(monkeypatch):
    url = "http://host.test/auth/check-logged"
    mock = AsyncMock(return_value=http_response(url, status_code=401))
    monkeypatch.setattr(httpx.AsyncClient, "get", mock)

    response = await host_api.who_am_i("my_fake_token")

    assert response.status_code == 401
    assert mock.call_args.kwargs["headers"] == {"Authorization": "Bearer my_fake_token"}


@pytest.mark.asyncio
async def test_who_am_i_server_error(monkeypatch):
    url = "http://host.test/auth/check-logged"
    mock = AsyncMock(return_value=http_response(url, status_code=503))
    monkeypatch.setattr(httpx.AsyncClient, "get", mock)

    with pytest.raises(HTTPException) as e:
        await host_api.who_am_i("my_fake_token")
    assert e.value.status_code == 500


@pytest.mark.asyncio
async def test_get_host_user(monkeypatch):
    mock = AsyncMock(
        return_value=http_response(
            f"{USER_URL}/u1",
            json={"id": "u1", "displayName": "Jane Doe", "role": "USER", "extra": 1},
        )
    )
    monkeypatch.setattr(httpx.AsyncClient, "get", mock)

    user = await host_api.get_host_user("u1")

    assert user.id == "u1"
    assert user.name == "Jane Doe"
    assert user.groups == []


@pytest.mark.asyncio
async def test_get_host_user_errors(monkeypatch):
    monkeypatch.setattr(
        httpx.AsyncClient,
        "get",
        AsyncMock(return_value=http_response(f"{USER_URL}/u1", status_code=404)),
    )
    with pytest.raises(RecordNotFoundError):
        await host_api.get_host_user("u1")

    monkeypatch.setattr(
        httpx.AsyncClient,
        "get",
        AsyncMock(return_value=http_response(f"{USER_URL}/u1", status_code=500)),
    )
    with pytest.raises(InvalidResponseError):
        await host_api.get_host_user("u1")


@pytest.mark.asyncio
async def test_get_display_names(monkeypatch):
    async def get_user(url, **kwargs):
        user_id = url.rsplit("/", 1)[-1]
        if user_id == "gone":
            return http_response(url, status_code=404)
        if user_id == "flaky":
            raise httpx.ConnectError("connection refused")
        return http_response(url, json={"id": user_id, "displayName": f"Name {user_id}"})

    mock = AsyncMock(side_effect=get_user)
    monkeypatch.setattr(httpx.AsyncClient, "get", mock)

    names = await host_api.get_display_names(["u1", "gone", "u1", "flaky"])

    assert names == {"u1": "Name u1", "gone": None, "flaky": None}
    assert mock.await_count == 3
