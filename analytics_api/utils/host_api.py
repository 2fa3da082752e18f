"""Client for the host platform identity service."""
from typing import List

from fastapi import HTTPException
from fastapi.logger import logger
from httpx import AsyncClient, HTTPError, ReadTimeout
from httpx import Response as HTTPXResponse

from ..errors import InvalidResponseError, RecordNotFoundError
from ..models.pydantic.authentication import User
from ..settings.globals import HOST_API_URL, HTTP_TIMEOUT, SERVICE_ACCOUNT_TOKEN


async def who_am_i(token: str) -> HTTPXResponse:
    """Call host API to get token's identity."""

    headers = {"Authorization": f"Bearer {token}"}
    url = f"{HOST_API_URL}/auth/check-logged"

    try:
        async with AsyncClient() as client:
            response: HTTPXResponse = await client.get(
                url, headers=headers, timeout=HTTP_TIMEOUT
            )
    except ReadTimeout:
        raise HTTPException(
            status_code=500,
            detail="Call to authorization server timed-out. Please try again.",
        )

    if response.status_code != 200 and response.status_code != 401:
        logger.warning(
            f"Failed to authorize user. Server responded with response code: {response.status_code} and message: {response.text}"
        )
        raise HTTPException(
            status_code=500, detail="Call to authorization server failed"
        )

    return response


async def get_host_user(user_id: str) -> User:
    """Call host API to get a user by id."""

    headers = {"Authorization": f"Bearer {SERVICE_ACCOUNT_TOKEN}"}
    url = f"{HOST_API_URL}/auth/user/{user_id}"

    async with AsyncClient() as client:
        response: HTTPXResponse = await client.get(
            url, headers=headers, timeout=HTTP_TIMEOUT
        )

    if response.status_code == 404:
        raise RecordNotFoundError(f"User {user_id} does not exist")

    if response.status_code != 200:
        logger.warning(
            f"Failed to fetch user {user_id}. Server responded with response code: {response.status_code} and message: {response.text}"
        )
        raise InvalidResponseError("Call to user service failed")

    return User(**response.json())


async def get_display_names(user_ids: List[str]) -> dict:
    """Resolve display names, users which no longer exist map to None."""

    names = dict()
    for user_id in user_ids:
        if user_id in names:
            continue
        try:
            user = await get_host_user(user_id)
        except RecordNotFoundError:
            logger.info(f"Shared user {user_id} no longer exists")
            names[user_id] = None
        except (InvalidResponseError, HTTPError) as e:
            logger.warning(f"Could not resolve display name of {user_id}: {e}")
            names[user_id] = None
        else:
            names[user_id] = user.name
    return names
