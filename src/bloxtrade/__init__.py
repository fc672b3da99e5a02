"""Async client for the economy and users web APIs."""

from bloxtrade.client import Client
from bloxtrade.economy import Listing, PurchaseFailureReason, PurchaseLimitedError, Reseller, UserSale
from bloxtrade.session import Identity, SessionState
from bloxtrade.settings import ClientSettings
from bloxtrade.transport import (
    BadRequestError,
    ClientError,
    CredentialNotSetError,
    InvalidCredentialError,
    InvalidLimitError,
    Limit,
    MalformedResponseError,
    Page,
    RateLimitedError,
    RemoteError,
    ServerError,
    StaleTokenError,
    TokenHeaderMissingError,
    TransportError,
    UnrecognizedStatusError,
    iterate_pages,
)

__all__ = [
    "BadRequestError",
    "Client",
    "ClientError",
    "ClientSettings",
    "CredentialNotSetError",
    "Identity",
    "InvalidCredentialError",
    "InvalidLimitError",
    "Limit",
    "Listing",
    "MalformedResponseError",
    "Page",
    "PurchaseFailureReason",
    "PurchaseLimitedError",
    "RateLimitedError",
    "RemoteError",
    "Reseller",
    "ServerError",
    "SessionState",
    "StaleTokenError",
    "TokenHeaderMissingError",
    "TransportError",
    "UnrecognizedStatusError",
    "UserSale",
    "iterate_pages",
]
