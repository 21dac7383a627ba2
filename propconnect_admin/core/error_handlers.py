"""HTTP error handlers for the admin console.

This module is the bridge between console exceptions and HTTP responses:

- session problems become redirects to the login page (or a loading placeholder),
- lookup and validation failures become 404 / 422 JSON bodies,
- backend failures keep their 4xx status (5xx become 502) and are also pushed to the
  operator as a destructive notification, so the page shell never breaks.
"""

import logging
from urllib.parse import urlencode

from fastapi import Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from propconnect_admin.exceptions import (
    AppException,
    AuthenticationError,
    BackendError,
    BackendUnavailableError,
    InsufficientPermissionsError,
    InvalidCredentialsError,
    NotAuthenticatedError,
    NotFoundError,
    SessionExpiredError,
    SessionResolvingError,
    ValidationError,
)

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"


def _notify_failure(request: Request, title: str, description: str) -> None:
    console = getattr(request.app.state, "console", None)
    if console is not None:
        console.notifier.error(title, description)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
    )


async def validation_error_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    """
    Convert a ValidationError into a 422 response.

    The body holds `detail` and, when the error names one, the offending `field`.
    """
    content = {"detail": str(exc)}
    if exc.field:
        content["field"] = exc.field
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT, content=content
    )


async def insufficient_permissions_handler(
    request: Request, exc: InsufficientPermissionsError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)}
    )


async def invalid_credentials_handler(
    request: Request, exc: InvalidCredentialsError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED, content={"detail": str(exc)}
    )


async def not_authenticated_handler(
    request: Request, exc: NotAuthenticatedError
) -> RedirectResponse:
    """Send an anonymous operator to the login page, remembering where they were going."""
    location = f"{LOGIN_PATH}?{urlencode({'next': exc.next_path})}"
    return RedirectResponse(location, status_code=status.HTTP_303_SEE_OTHER)


async def session_expired_handler(
    request: Request, exc: SessionExpiredError
) -> RedirectResponse:
    return RedirectResponse(LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)


async def session_resolving_handler(
    request: Request, exc: SessionResolvingError
) -> JSONResponse:
    """Loading placeholder shown while the persisted session is still being read."""
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc), "loading": True},
        headers={"Retry-After": "1"},
    )


async def authentication_error_handler(
    request: Request, exc: AuthenticationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED, content={"detail": str(exc)}
    )


async def backend_error_handler(request: Request, exc: BackendError) -> JSONResponse:
    """
    Relay a backend failure.

    4xx statuses are passed through as is; backend 5xx become 502 Bad Gateway.
    """
    status_code = (
        exc.status_code
        if 400 <= exc.status_code < 500
        else status.HTTP_502_BAD_GATEWAY
    )
    _notify_failure(request, "Error", str(exc))
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


async def backend_unavailable_handler(
    request: Request, exc: BackendUnavailableError
) -> JSONResponse:
    _notify_failure(request, "Connection Error", str(exc))
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)}
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    logger.error(f"Unhandled application error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An internal error occurred"},
    )


async def page_not_found_handler(request: Request, exc: StarletteHTTPException):
    """Unknown routes get the not-found page with a link back to the dashboard."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": "Page not found", "home": "/"},
        )
    return await http_exception_handler(request, exc)


def register_exception_handlers(app) -> None:
    """
    Register the console's exception-to-HTTP mapping on a FastAPI app.

    Handlers are added from most specific to most general so that subclasses are matched
    before their parents:
    NotFoundError -> 404, ValidationError -> 422, InsufficientPermissionsError -> 403,
    InvalidCredentialsError -> 401, NotAuthenticatedError -> 303 to /login?next=...,
    SessionExpiredError -> 303 to /login, SessionResolvingError -> 503 with Retry-After,
    AuthenticationError -> 401, BackendError -> 4xx or 502, BackendUnavailableError -> 502,
    AppException -> 500, unknown routes -> 404 page.
    """
    # CRUD exception handlers
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)

    # Auth exception handlers (specific before general)
    app.add_exception_handler(
        InsufficientPermissionsError, insufficient_permissions_handler
    )
    app.add_exception_handler(InvalidCredentialsError, invalid_credentials_handler)
    app.add_exception_handler(NotAuthenticatedError, not_authenticated_handler)
    app.add_exception_handler(SessionExpiredError, session_expired_handler)
    app.add_exception_handler(SessionResolvingError, session_resolving_handler)
    app.add_exception_handler(AuthenticationError, authentication_error_handler)

    # Backend exception handlers
    app.add_exception_handler(BackendError, backend_error_handler)
    app.add_exception_handler(BackendUnavailableError, backend_unavailable_handler)

    # Catch-all for unhandled application exceptions
    app.add_exception_handler(AppException, app_exception_handler)

    app.add_exception_handler(StarletteHTTPException, page_not_found_handler)
