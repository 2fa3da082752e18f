import pytest

from analytics_api.models.pydantic.authentication import User

from .. import ADMIN_1, USER_1, USER_2
from ..conftest import client_with_user


@pytest.mark.asyncio
async def test_dataset_lifecycle(async_client):
    payload = {"name": "Visitors", "dimension1": "Country", "value": "Visitors"}
    response = await async_client.post("/dataset", json=payload)
    assert response.status_code == 201
    dataset = response.json()["data"]
    assert response.headers["Location"] == f"/dataset/{dataset['id']}"
    assert dataset["owner_id"] == USER_1.id
    assert dataset["type"] == 2
    assert dataset["dimension2"] is None

    await async_client.post(
        "/threshold",
        json={"dataset_id": dataset["id"], "dimension1": "AT", "option": ">", "value": "1"},
    )
    await async_client.post("/share", json={"dataset_id": dataset["id"], "type": 3})

    response = await async_client.get(f"/dataset/{dataset['id']}")
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Visitors"

    response = await async_client.get("/datasets")
    assert [d["id"] for d in response.json()["data"]] == [dataset["id"]]

    response = await async_client.delete(f"/dataset/{dataset['id']}")
    assert response.status_code == 200
    assert response.json()["data"]["id"] == dataset["id"]

    response = await async_client.get(f"/dataset/{dataset['id']}")
    assert response.status_code == 404

    # shares and thresholds went with the dataset
    response = await async_client.get(f"/threshold/{dataset['id']}")
    assert response.status_code == 404

    response = await async_client.get("/datasets")
    assert response.json()["data"] == []


@pytest.mark.asyncio
async def test_dataset_validation(async_client):
    response = await async_client.post("/dataset", json={"name": ""})
    assert response.status_code == 422
    assert response.json()["status"] == "failed"

    response = await async_client.post("/dataset", json={"name": "x", "owner_id": "me"})
    assert response.status_code == 422

    response = await async_client.get("/dataset/0")
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_dataset_access(app):
    async with client_with_user(app, USER_1) as client:
        response = await client.post("/dataset", json={"name": "Visitors"})
    dataset_id = response.json()["data"]["id"]

    async with client_with_user(app, USER_2) as client:
        response = await client.get(f"/dataset/{dataset_id}")
        assert response.status_code == 401

        response = await client.delete(f"/dataset/{dataset_id}")
        assert response.status_code == 401

        response = await client.get("/datasets")
        assert response.json()["data"] == []

    async with client_with_user(app, ADMIN_1) as client:
        response = await client.get(f"/dataset/{dataset_id}")
        assert response.status_code == 200


@pytest.mark.asyncio
async def test_shared_datasets(app):
    async with client_with_user(app, USER_1) as client:
        response = await client.post("/dataset", json={"name": "Visitors"})
        first = response.json()["data"]["id"]
        response = await client.post("/dataset", json={"name": "Revenue"})
        second = response.json()["data"]["id"]

        for share in [
            {"dataset_id": first, "type": 1, "target": "group_b"},
            {"dataset_id": second, "type": 0, "target": USER_2.id},
            {"dataset_id": first, "type": 2, "target": USER_2.id},
            {"dataset_id": second, "type": 1, "target": "group_x"},
            {"dataset_id": second, "type": 3},
        ]:
            response = await client.post("/share", json=share)
            assert response.status_code == 201

    async with client_with_user(app, USER_2) as client:
        response = await client.get("/datasets/shared")

    assert response.status_code == 200
    # group shares first, then direct shares, one entry per share
    assert [d["id"] for d in response.json()["data"]] == [first, second, first]


@pytest.mark.asyncio
async def test_shared_dataset_read_access(app):
    async with client_with_user(app, USER_1) as client:
        response = await client.post("/dataset", json={"name": "Visitors"})
        dataset_id = response.json()["data"]["id"]
        response = await client.post(
            "/share", json={"dataset_id": dataset_id, "type": 1, "target": "group_b"}
        )
        assert response.status_code == 201

    async with client_with_user(app, USER_2) as client:
        response = await client.get(f"/dataset/{dataset_id}")
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Visitors"

        # sharees read, they do not manage
        response = await client.delete(f"/dataset/{dataset_id}")
        assert response.status_code == 401

    outsider = User(id="userid_789", groups=["group_x"])
    async with client_with_user(app, outsider) as client:
        response = await client.get(f"/dataset/{dataset_id}")
        assert response.status_code == 401
