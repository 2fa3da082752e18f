"""Service health."""

from fastapi import APIRouter, HTTPException
from fastapi.logger import logger
from fastapi.responses import ORJSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from ..application import db_session
from ..models.pydantic.responses import Response

router = APIRouter()


@router.get(
    "/ping",
    response_class=ORJSONResponse,
    tags=["Health"],
    response_model=Response,
)
async def ping():
    """Simple uptime check, including the read database."""

    try:
        await db_session().execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database not reachable: {e}")
        raise HTTPException(status_code=503, detail="Database not reachable")

    return Response(data="pong")
