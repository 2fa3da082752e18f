"""Shares give other users, groups or anyone holding a link access to a
dataset.

Link shares carry a random token and can be protected with a password.
Stored passwords are never returned, only whether a password is set.
"""
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from fastapi.logger import logger
from fastapi.responses import ORJSONResponse

from ...authentication.token import get_user
from ...crud import activity, shares
from ...errors import BadRequestError, RecordNotFoundError
from ...models.enum.activity import ActivityObject, ActivitySubject
from ...models.enum.shares import ShareType
from ...models.orm.datasets import Dataset as ORMDataset
from ...models.orm.shares import Share as ORMShare
from ...models.pydantic.authentication import User
from ...models.pydantic.datasets import Dataset, DatasetResponse
from ...models.pydantic.shares import (
    DeletedCount,
    DeletedResponse,
    Share,
    ShareCreated,
    ShareCreatedResponse,
    ShareCreateIn,
    ShareResponse,
    SharesResponse,
    ShareUpdateIn,
)
from ...utils.host_api import get_display_names
from ...utils.security import verify_password
from .. import get_owned_dataset, owned_dataset_dependency

router = APIRouter()


async def _get_owned_share(share_id: int, user: User) -> ORMShare:
    try:
        row: ORMShare = await shares.get_share(share_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    await get_owned_dataset(row.dataset_id, user)
    return row


@router.get(
    "/token/{token}",
    response_class=ORJSONResponse,
    tags=["Shares"],
    response_model=DatasetResponse,
)
async def get_dataset_by_token(
    *,
    token: str = Path(..., min_length=1),
    password: Optional[str] = Query(
        None, description="Required if the link is password protected"
    ),
) -> DatasetResponse:
    """Resolve a public link to its dataset.

    No authentication is needed. If the link is password protected the
    password must be passed as query parameter.
    """
    try:
        share: ORMShare = await shares.get_share_by_token(token)
        row: ORMDataset = await shares.get_dataset_by_token(token)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if share.password and not verify_password(password or "", share.password):
        logger.info(f"Wrong password for share {share.id}")
        raise HTTPException(
            status_code=401, detail="This link is protected by a password"
        )

    return DatasetResponse(data=Dataset.model_validate(row))


@router.get(
    "/{dataset_id}",
    response_class=ORJSONResponse,
    tags=["Shares"],
    response_model=SharesResponse,
)
async def get_shares(
    *, dataset: ORMDataset = Depends(owned_dataset_dependency)
) -> SharesResponse:
    """All shares of a dataset.

    User shares carry the display name of the user. Users which do not
    exist anymore have no display name.
    """
    rows: List[ORMShare] = await shares.get_shares(dataset.id)

    user_ids = [row.target for row in rows if row.type == ShareType.user and row.target]
    names: Dict[str, Optional[str]] = await get_display_names(user_ids)

    data = list()
    for row in rows:
        share = Share.model_validate(row)
        if row.type == ShareType.user:
            share = share.model_copy(update={"display_name": names.get(row.target)})
        data.append(share)

    return SharesResponse(data=data)


@router.post(
    "",
    response_class=ORJSONResponse,
    tags=["Shares"],
    response_model=ShareCreatedResponse,
    status_code=201,
)
async def create_share(
    *, request: ShareCreateIn, user: User = Depends(get_user)
) -> ShareCreatedResponse:
    """Share a dataset.

    Link shares (type `3`) get a token which identifies the dataset
    publicly. All other types share with the user or group given as
    target.
    """
    await get_owned_dataset(request.dataset_id, user)

    row = await shares.create_share(
        request.dataset_id, request.type, request.target, user.id
    )
    await activity.create_activity(
        request.dataset_id, ActivityObject.dataset, ActivitySubject.dataset_share, user.id
    )

    return ShareCreatedResponse(data=ShareCreated(id=row.id, token=row.token))


@router.put(
    "/{share_id}",
    response_class=ORJSONResponse,
    tags=["Shares"],
    response_model=ShareResponse,
)
async def update_share(
    *,
    share_id: int = Path(..., ge=1),
    request: ShareUpdateIn,
    user: User = Depends(get_user),
) -> ShareResponse:
    """Set the password of a share. An empty password removes it."""

    await _get_owned_share(share_id, user)
    try:
        row = await shares.update_share_password(share_id, request.password)
    except BadRequestError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ShareResponse(data=Share.model_validate(row))


@router.delete(
    "/dataset/{dataset_id}",
    response_class=ORJSONResponse,
    tags=["Shares"],
    response_model=DeletedResponse,
)
async def delete_shares_by_dataset(
    *, dataset: ORMDataset = Depends(owned_dataset_dependency)
) -> DeletedResponse:
    """Remove all shares of a dataset."""

    deleted = await shares.delete_shares_by_dataset(dataset.id)
    return DeletedResponse(data=DeletedCount(deleted=deleted))


@router.delete(
    "/{share_id}",
    response_class=ORJSONResponse,
    tags=["Shares"],
    response_model=DeletedResponse,
)
async def delete_share(
    *, share_id: int = Path(..., ge=1), user: User = Depends(get_user)
) -> DeletedResponse:
    """Remove a share. Removing a share which does not exist is not an
    error."""

    try:
        await _get_owned_share(share_id, user)
    except HTTPException as e:
        if e.status_code != 404:
            raise
        return DeletedResponse(data=DeletedCount(deleted=0))

    deleted = await shares.delete_share(share_id)
    return DeletedResponse(data=DeletedCount(deleted=deleted))
