from fastapi import Depends, HTTPException, Path

from ..authentication.datasets import can_manage_dataset, can_read_dataset
from ..authentication.token import get_user
from ..crud import datasets as datasets_crud
from ..errors import RecordNotFoundError
from ..models.orm.datasets import Dataset as ORMDataset
from ..models.pydantic.authentication import User


async def dataset_dependency(
    dataset_id: int = Path(..., title="Dataset id", ge=1)
) -> ORMDataset:
    try:
        return await datasets_crud.get_dataset(dataset_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def assert_owner(dataset: ORMDataset, user: User) -> None:
    """Raise a 401 unless the user owns the dataset or is an ADMIN."""

    if can_manage_dataset(dataset, user):
        return
    raise HTTPException(
        status_code=401,
        detail=f"Unauthorized access to dataset {dataset.id} by a user who is not an admin or owner of the dataset.",
    )


async def get_owned_dataset(dataset_id: int, user: User) -> ORMDataset:
    """Fetch a dataset the user may manage, 404 or 401 otherwise."""
    try:
        row: ORMDataset = await datasets_crud.get_dataset(dataset_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    assert_owner(row, user)
    return row


async def owned_dataset_dependency(
    dataset: ORMDataset = Depends(dataset_dependency),
    user: User = Depends(get_user),
) -> ORMDataset:
    assert_owner(dataset, user)
    return dataset


async def readable_dataset_dependency(
    dataset: ORMDataset = Depends(dataset_dependency),
    user: User = Depends(get_user),
) -> ORMDataset:
    """Owners, admins and users the dataset is shared with."""

    if not await can_read_dataset(dataset, user):
        raise HTTPException(
            status_code=401,
            detail=f"Unauthorized access to dataset {dataset.id} by a user it is not shared with.",
        )
    return dataset
