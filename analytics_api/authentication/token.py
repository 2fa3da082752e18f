from fastapi import Depends, HTTPException
from fastapi.logger import logger
from fastapi.security import OAuth2PasswordBearer
from httpx import Response

from ..models.pydantic.authentication import User
from ..utils.host_api import who_am_i

# token dependency where we immediately cause an exception if there is no auth token
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/token")


async def get_user(token: str = Depends(oauth2_scheme)) -> User:
    """Get the details for authenticated user."""

    response: Response = await who_am_i(token)

    if response.status_code == 401:
        logger.info("Unauthorized user")
        raise HTTPException(
            status_code=401,
            detail="Unauthorized access - this operation requires user authentication via a token",
        )
    else:
        return User(**response.json())

