import string

import pytest

from analytics_api.application import ContextEngine
from analytics_api.crud import shares
from analytics_api.errors import RecordNotFoundError
from analytics_api.models.enum.shares import ShareType
from analytics_api.utils.security import verify_password

from ..utils import create_dataset

ALPHABET = set(string.ascii_letters + string.digits)


@pytest.mark.asyncio
async def test_shares(db):
    """Testing all CRUD operations on shares in one go."""

    dataset = await create_dataset("owner")

    # There should be no shares yet
    async with ContextEngine("READ"):
        rows = await shares.get_shares(dataset.id)
    assert rows == []

    async with ContextEngine("WRITE"):
        link = await shares.create_share(
            dataset.id, ShareType.link, "ignored", initiator_id="owner"
        )
        user = await shares.create_share(dataset.id, ShareType.user, "userid_456")
        group = await shares.create_share(dataset.id, ShareType.group, "group_a")

    # Link shares get a token and no target
    assert len(link.token) == 15
    assert set(link.token) <= ALPHABET
    assert link.target is None
    assert link.initiator_id == "owner"
    assert link.password is None

    # All other shares get a target and no token
    assert user.token is None
    assert user.target == "userid_456"
    assert group.token is None

    async with ContextEngine("READ"):
        rows = await shares.get_shares(dataset.id)
        by_token = await shares.get_dataset_by_token(link.token)
    assert [row.id for row in rows] == [link.id, user.id, group.id]
    assert by_token.id == dataset.id

    # Unknown tokens are not found
    async with ContextEngine("READ"):
        with pytest.raises(RecordNotFoundError):
            await shares.get_dataset_by_token("unknown")


@pytest.mark.asyncio
async def test_update_share_password(db):
    dataset = await create_dataset("owner")
    async with ContextEngine("WRITE"):
        link = await shares.create_share(dataset.id, ShareType.link, None)

    async with ContextEngine("WRITE"):
        row = await shares.update_share_password(link.id, "x")
    assert row.password is not None
    assert row.password != "x"
    assert verify_password("x", row.password) is True
    assert verify_password("y", row.password) is False

    # the token survives password changes
    assert row.token == link.token

    async with ContextEngine("WRITE"):
        row = await shares.update_share_password(link.id, "")
    assert row.password is None

    async with ContextEngine("WRITE"):
        with pytest.raises(RecordNotFoundError):
            await shares.update_share_password(4711, "x")


@pytest.mark.asyncio
async def test_delete_shares(db):
    dataset = await create_dataset("owner")
    other = await create_dataset("owner")
    async with ContextEngine("WRITE"):
        first = await shares.create_share(dataset.id, ShareType.user, "u1")
        await shares.create_share(dataset.id, ShareType.user, "u2")
        await shares.create_share(other.id, ShareType.user, "u1")

    async with ContextEngine("WRITE"):
        assert await shares.delete_share(first.id) == 1
        # deleting again is not an error
        assert await shares.delete_share(first.id) == 0
        assert await shares.delete_share(4711) == 0

    async with ContextEngine("WRITE"):
        assert await shares.delete_shares_by_dataset(dataset.id) == 1
        assert await shares.delete_shares_by_dataset(dataset.id) == 0

    async with ContextEngine("READ"):
        assert await shares.get_shares(dataset.id) == []
        assert len(await shares.get_shares(other.id)) == 1


@pytest.mark.asyncio
async def test_get_shared_datasets(db):
    sales = await create_dataset("owner", name="Sales")
    visits = await create_dataset("owner", name="Visits")
    costs = await create_dataset("owner", name="Costs")

    async with ContextEngine("WRITE"):
        await shares.create_share(visits.id, ShareType.user, "u1")
        await shares.create_share(sales.id, ShareType.group, "group_a")
        await shares.create_share(costs.id, ShareType.group, "group_b")
        await shares.create_share(sales.id, ShareType.user_group, "u1")
        await shares.create_share(costs.id, ShareType.link, None)
        await shares.create_share(costs.id, ShareType.user, "u2")

    async with ContextEngine("READ"):
        shared = await shares.get_shared_datasets("u1", ["group_a", "group_b"])
        unique = await shares.get_shared_datasets(
            "u1", ["group_a", "group_b"], deduplicate=True
        )
        nothing = await shares.get_shared_datasets("u3", [])

    # group shares first, then direct shares, duplicates kept
    assert [d.name for d in shared] == ["Sales", "Costs", "Visits", "Sales"]
    assert [d.name for d in unique] == ["Sales", "Costs", "Visits"]
    assert nothing == []


@pytest.mark.asyncio
async def test_get_shared_dataset(db):
    dataset = await create_dataset("owner")

    async with ContextEngine("WRITE"):
        await shares.create_share(dataset.id, ShareType.user, "u1")
        await shares.create_share(dataset.id, ShareType.user_group, "u2")
        await shares.create_share(dataset.id, ShareType.group, "group_a")
        await shares.create_share(dataset.id, ShareType.link, None)

    async with ContextEngine("READ"):
        for user_id, groups in [("u1", []), ("u2", []), ("u3", ["group_a"])]:
            row = await shares.get_shared_dataset(dataset.id, user_id, groups)
            assert row.id == dataset.id

        with pytest.raises(RecordNotFoundError):
            await shares.get_shared_dataset(dataset.id, "u3", ["group_b"])
        # a group id is not a user id
        with pytest.raises(RecordNotFoundError):
            await shares.get_shared_dataset(dataset.id, "group_a", [])
        with pytest.raises(RecordNotFoundError):
            await shares.get_shared_dataset(4711, "u1", [])
