"""Exception taxonomy for classified API failures.

Every public operation either returns its typed payload or raises exactly
one of these. ``StaleTokenError`` is normally consumed by the executor's
single retry and only reaches callers when the retry is rejected too.
"""

from __future__ import annotations


class ClientError(Exception):
    """Base class for every error raised by the client."""


class TransportError(ClientError):
    """The request never produced an HTTP response (connect failure, timeout, ...)."""


class MalformedResponseError(ClientError):
    """A 200 response whose body does not match the expected shape."""


class BadRequestError(ClientError):
    """A 400 response without a structured error body."""


class InvalidCredentialError(ClientError):
    """A 401 response: the session cookie is missing, expired, or rejected."""


class CredentialNotSetError(ClientError):
    """An authenticated operation was attempted on a client without a credential."""


class RateLimitedError(ClientError):
    """A 429 response."""


class ServerError(ClientError):
    """A 500 response."""


class UnrecognizedStatusError(ClientError):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"Unrecognized status code {status_code}")
        self.status_code = status_code


class RemoteError(ClientError):
    """A structured ``{errors: [{code, message}]}`` rejection from the service."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"Remote error {code}: {message}")
        self.code = code
        self.message = message


class StaleTokenError(ClientError):
    """A 403 caused by an outdated x-csrf-token; ``token`` is the replacement."""

    def __init__(self, token: str) -> None:
        super().__init__("x-csrf-token is stale")
        self.token = token


class TokenHeaderMissingError(ClientError):
    """A token-related 403 that did not carry a replacement x-csrf-token."""


class InvalidLimitError(ClientError, ValueError):
    """A page size outside the allowed set, rejected before any request."""
