"""Response envelope: {success, message, data?, error?, count?, warning?}."""

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from jobboard.errors import ServiceError


def respond(status_code: int, message: str, data: Any = None, count: int | None = None) -> JSONResponse:
    """Build a success envelope."""
    body: dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        body["data"] = jsonable_encoder(data, by_alias=True)
    if count is not None:
        body["count"] = count
    return JSONResponse(status_code=status_code, content=body)


def fail(status_code: int, message: str, error: str | None = None, warning: str | None = None) -> JSONResponse:
    """Build a failure envelope."""
    body: dict[str, Any] = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    if warning is not None:
        body["warning"] = warning
    return JSONResponse(status_code=status_code, content=body)


def service_error_response(exc: ServiceError) -> JSONResponse:
    return fail(exc.status_code, exc.message, error=exc.error, warning=exc.warning)
