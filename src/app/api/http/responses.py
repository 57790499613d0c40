"""JSON response helpers shared by the HTTP routers."""

from typing import Any

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, Field
from starlette.responses import JSONResponse

from src.app.runtime.context import get_config


class ErrorBody(BaseModel):
    """Error payload returned by every failing endpoint."""

    error: str
    message: str | None = Field(default=None, description="Detail for unexpected failures")
    messages: dict[str, list[str]] | None = Field(
        default=None, description="Field -> validation messages"
    )


class MessageBody(BaseModel):
    message: str


def error_response(
    status_code: int,
    error: str,
    *,
    message: str | None = None,
    messages: dict[str, list[str]] | None = None,
) -> JSONResponse:
    """Build an ``ErrorBody`` response, omitting fields that are not set."""
    body = ErrorBody(error=error, message=message, messages=messages)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
    )


def unexpected_error_response(error: str, exc: Exception) -> JSONResponse:
    """500 response; the exception text is only exposed outside production."""
    detail = None if get_config().app.environment == "production" else str(exc)
    return error_response(500, error, message=detail)


def json_response(content: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))
