import pytest

from .. import USER_1, USER_2
from ..conftest import client_with_user
from ..utils import create_dataset


@pytest.mark.asyncio
async def test_thresholds(async_client):
    dataset = await create_dataset(USER_1.id)

    expected = [(2, "red"), (3, "orange"), (1, "green"), ("9", "green"), (None, "green")]
    for severity, _ in expected:
        payload = {
            "dataset_id": dataset.id,
            "dimension1": "AT",
            "option": ">",
            "value": 100,
        }
        if severity is not None:
            payload["severity"] = severity
        response = await async_client.post("/threshold", json=payload)
        assert response.status_code == 201
        assert response.json()["data"]["value"] == "100"

    response = await async_client.get(f"/threshold/{dataset.id}")
    assert response.status_code == 200
    data = response.json()["data"]
    assert [(t["severity"], t["color"]) for t in data] == [
        (2, "red"),
        (3, "orange"),
        (1, "green"),
        (1, "green"),
        (1, "green"),
    ]

    threshold_id = data[0]["id"]
    response = await async_client.delete(f"/threshold/{threshold_id}")
    assert response.json()["data"] == {"deleted": 1}

    response = await async_client.delete(f"/threshold/{threshold_id}")
    assert response.status_code == 200
    assert response.json()["data"] == {"deleted": 0}

    response = await async_client.get(f"/threshold/{dataset.id}")
    assert len(response.json()["data"]) == 4


@pytest.mark.asyncio
async def test_thresholds_of_other_users(app):
    dataset = await create_dataset(USER_1.id)

    async with client_with_user(app, USER_1) as client:
        response = await client.post(
            "/threshold",
            json={
                "dataset_id": dataset.id,
                "dimension1": "AT",
                "option": ">",
                "value": "100",
                "severity": 2,
            },
        )
    threshold_id = response.json()["data"]["id"]

    async with client_with_user(app, USER_2) as client:
        response = await client.get(f"/threshold/{dataset.id}")
        assert response.status_code == 401

        response = await client.delete(f"/threshold/{threshold_id}")
        assert response.status_code == 401

        response = await client.get("/threshold/4711")
        assert response.status_code == 404
