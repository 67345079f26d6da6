import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class SalonError(Exception):
    """A failed operation reported to the client as ``{success: false, message}``."""

    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotFoundError(SalonError):
    def __init__(self, message: str):
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class NotAuthorizedError(SalonError):
    def __init__(self, message: str = "Not Authorized Login Again"):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)


class ForbiddenError(SalonError):
    def __init__(self, message: str):
        super().__init__(message, status.HTTP_403_FORBIDDEN)


def failure(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
    )


EMPTY_VALUE_ERRORS = ("missing", "string_too_short")


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if any(error.get("type") in EMPTY_VALUE_ERRORS for error in errors):
        return "Missing Details"
    if any(error.get("loc") and error["loc"][-1] == "email" for error in errors):
        return "Please enter a valid email"
    first = errors[0] if errors else {}
    return first.get("msg", "Invalid request")


def register_error_handlers(app: FastAPI) -> None:
    """Render every error as the uniform failure envelope."""

    @app.exception_handler(SalonError)
    async def salon_error_handler(request: Request, exc: SalonError):
        logger.info(f"{request.method} {request.url.path} failed: {exc.message}")
        return failure(exc.message, exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return failure(str(exc.detail), exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return failure(_validation_message(exc), status.HTTP_422_UNPROCESSABLE_ENTITY)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return failure(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
