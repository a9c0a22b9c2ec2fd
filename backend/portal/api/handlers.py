# portal/api/handlers.py
"""
Exception handlers registered on the FastAPI app.

Expected failures are already turned into responses by the routers; these
handlers cover what crosses the route boundary as an exception and reduce it
to a generic JSON body.
"""
import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse

from portal.api.deps import GuardInterrupt, clear_auth_cookie
from portal.core.errors import InvalidToken, PortalError

logger = logging.getLogger("uvicorn.error")


async def guard_interrupt_handler(request: Request, exc: GuardInterrupt):
    if exc.location:
        response = RedirectResponse(url=exc.location, status_code=status.HTTP_302_FOUND)
    else:
        response = JSONResponse(status_code=exc.status_code, content={"error": exc.detail})
    if exc.clear_cookie:
        clear_auth_cookie(response)
    return response


async def portal_error_handler(request: Request, exc: PortalError):
    if exc.status_code >= 500:
        logger.error("[error] %s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    response = JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})
    if isinstance(exc, InvalidToken):
        clear_auth_cookie(response)
    return response


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid request body"})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("[error] unhandled exception on %s", request.url.path)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": "Server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GuardInterrupt, guard_interrupt_handler)
    app.add_exception_handler(PortalError, portal_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
