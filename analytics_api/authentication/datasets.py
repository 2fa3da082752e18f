"""Who may see and who may manage a dataset."""
from ..crud import shares as shares_crud
from ..errors import RecordNotFoundError
from ..models.orm.datasets import Dataset as ORMDataset
from ..models.pydantic.authentication import User


def can_manage_dataset(dataset: ORMDataset, user: User) -> bool:
    return user.role == "ADMIN" or dataset.owner_id == user.id


async def can_read_dataset(dataset: ORMDataset, user: User) -> bool:
    """Managers can read a dataset, and so can users it is shared with,
    directly or through one of their groups."""

    if can_manage_dataset(dataset, user):
        return True
    try:
        await shares_crud.get_shared_dataset(dataset.id, user.id, user.groups)
    except RecordNotFoundError:
        return False
    return True
