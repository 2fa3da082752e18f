import pytest

from analytics_api.application import ContextEngine
from analytics_api.crud import dataloads
from analytics_api.errors import RecordNotFoundError

from ..utils import create_dataset


@pytest.mark.asyncio
async def test_dataloads(db):
    """Testing all CRUD operations on dataloads in one go."""

    dataset = await create_dataset("owner")

    async with ContextEngine("WRITE"):
        new_row = await dataloads.create_dataload(dataset.id, 1)

    assert new_row.name == "New"
    assert new_row.schedule == ""
    assert new_row.option == {}
    assert new_row.datasource_id == 1

    async with ContextEngine("WRITE"):
        row = await dataloads.update_dataload(
            new_row.id, "Regions", "daily", {"link": "regions.csv", "offset": "0"}
        )
    assert row.name == "Regions"
    assert row.schedule == "daily"
    assert row.option == {"link": "regions.csv", "offset": "0"}

    async with ContextEngine("READ"):
        fetched = await dataloads.get_dataload(new_row.id)
        daily = await dataloads.get_dataloads_by_schedule("daily")
        hourly = await dataloads.get_dataloads_by_schedule("hourly")
        rows = await dataloads.get_dataloads(dataset.id)
    assert fetched.option == {"link": "regions.csv", "offset": "0"}
    assert [d.id for d in daily] == [new_row.id]
    assert hourly == []
    assert len(rows) == 1

    # Updates need an existing dataload
    async with ContextEngine("WRITE"):
        with pytest.raises(RecordNotFoundError):
            await dataloads.update_dataload(4711, "Name", "", {})

    # Deletes do not
    async with ContextEngine("WRITE"):
        assert await dataloads.delete_dataload(new_row.id) == 1
        assert await dataloads.delete_dataload(new_row.id) == 0

    async with ContextEngine("READ"):
        with pytest.raises(RecordNotFoundError):
            await dataloads.get_dataload(new_row.id)
