"""Request execution, response classification, and pagination."""

from bloxtrade.transport.classifier import classify_response, parse_model
from bloxtrade.transport.errors import (
    BadRequestError,
    ClientError,
    CredentialNotSetError,
    InvalidCredentialError,
    InvalidLimitError,
    MalformedResponseError,
    RateLimitedError,
    RemoteError,
    ServerError,
    StaleTokenError,
    TokenHeaderMissingError,
    TransportError,
    UnrecognizedStatusError,
)
from bloxtrade.transport.executor import RequestExecutor
from bloxtrade.transport.pagination import Limit, Page, iterate_pages

__all__ = [
    "BadRequestError",
    "ClientError",
    "CredentialNotSetError",
    "InvalidCredentialError",
    "InvalidLimitError",
    "Limit",
    "MalformedResponseError",
    "Page",
    "RateLimitedError",
    "RemoteError",
    "RequestExecutor",
    "ServerError",
    "StaleTokenError",
    "TokenHeaderMissingError",
    "TransportError",
    "UnrecognizedStatusError",
    "classify_response",
    "iterate_pages",
    "parse_model",
]
