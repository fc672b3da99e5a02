"""Turn a completed HTTP exchange into a validated response or a typed error.

The service reports most failures through the status code, but 400 and 403
bodies may carry ``{"errors": [{"code": int, "message": str}]}``. Only the
first entry is meaningful. A 403 doubles as the anti-forgery handshake: when
the token is stale the service answers 403 with a fresh token in the
``x-csrf-token`` header and either no parseable body or an error code of 0.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from bloxtrade.transport.errors import (
    BadRequestError,
    ClientError,
    InvalidCredentialError,
    MalformedResponseError,
    RateLimitedError,
    RemoteError,
    ServerError,
    StaleTokenError,
    TokenHeaderMissingError,
    UnrecognizedStatusError,
)
from bloxtrade.transport.headers import XCSRF_HEADER

if TYPE_CHECKING:
    import httpx

ModelT = TypeVar("ModelT", bound=BaseModel)

# Error code the service uses for a token mismatch it does not explain.
TOKEN_MISMATCH_CODE = 0


class RemoteErrorEntry(BaseModel):
    model_config = ConfigDict(strict=True)

    code: int = Field(ge=0, le=65535)
    message: str


class RemoteErrorBody(BaseModel):
    model_config = ConfigDict(strict=True)

    errors: list[RemoteErrorEntry]


def _first_remote_error(response: httpx.Response) -> RemoteErrorEntry | None:
    """Return the first structured error, or None if the body has none."""
    try:
        body = RemoteErrorBody.model_validate_json(response.content)
    except ValidationError:
        return None
    return body.errors[0] if body.errors else None


def _classify_400(response: httpx.Response) -> ClientError:
    entry = _first_remote_error(response)
    if entry is None:
        return BadRequestError("Bad request")
    return RemoteError(entry.code, entry.message)


def _classify_403(response: httpx.Response) -> ClientError:
    new_token = response.headers.get(XCSRF_HEADER)
    entry = _first_remote_error(response)

    if entry is not None and entry.code != TOKEN_MISMATCH_CODE:
        # A genuine rejection that merely shares the 403 status.
        return RemoteError(entry.code, entry.message)

    if new_token is None:
        return TokenHeaderMissingError("403 response did not include a replacement x-csrf-token")
    return StaleTokenError(new_token)


def classify_response(response: httpx.Response) -> httpx.Response:
    """Return the response if it is a 200, otherwise raise the matching ClientError."""
    status = response.status_code

    if status == HTTPStatus.OK:
        return response
    if status == HTTPStatus.BAD_REQUEST:
        raise _classify_400(response)
    if status == HTTPStatus.UNAUTHORIZED:
        raise InvalidCredentialError("Credential rejected by the service")
    if status == HTTPStatus.FORBIDDEN:
        raise _classify_403(response)
    if status == HTTPStatus.TOO_MANY_REQUESTS:
        raise RateLimitedError("Too many requests")
    if status == HTTPStatus.INTERNAL_SERVER_ERROR:
        raise ServerError("Internal server error")
    raise UnrecognizedStatusError(status)


def parse_model(response: httpx.Response, model: type[ModelT]) -> ModelT:
    """Validate a 200 body against ``model``, mapping schema drift to MalformedResponseError."""
    try:
        return model.model_validate_json(response.content)
    except ValidationError as e:
        raise MalformedResponseError(f"Unexpected {model.__name__} payload: {e.error_count()} validation errors") from e
