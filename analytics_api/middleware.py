from fastapi import Request

from .application import ContextEngine


async def set_db_mode(request: Request, call_next):
    """This middleware replaces the db engine depending on the request type.

    Read requests use the read only pool. Write requests use the write
    pool and commit once the response is ready.
    """
    if request.method in ["PUT", "PATCH", "POST", "DELETE"]:
        method = "WRITE"
    else:
        method = "READ"
    async with ContextEngine(method):
        response = await call_next(request)
    return response


async def no_cache_response_header(request: Request, call_next):
    """This middleware adds a cache control response header.

    Dataset contents change with every dataload, so no GET response may
    be cached unless an endpoint sets its own header.
    """
    response = await call_next(request)

    if request.method == "GET" and "Cache-Control" not in response.headers:
        response.headers["Cache-Control"] = "no-cache"

    return response
