"""Per-client session state shared by every in-flight call."""

from __future__ import annotations

import threading

from pydantic import AliasChoices, BaseModel, Field

from bloxtrade.transport.errors import CredentialNotSetError
from bloxtrade.transport.headers import CREDENTIAL_COOKIE_NAME


class Identity(BaseModel, frozen=True):
    """The authenticated account, as returned by the users API."""

    user_id: int = Field(ge=0, validation_alias=AliasChoices("id", "user_id"))
    username: str = Field(validation_alias=AliasChoices("name", "username"))
    display_name: str = Field(validation_alias=AliasChoices("displayName", "display_name"))


class SessionState:
    """Credential, anti-forgery token, and identity cache for one client.

    The credential is fixed at construction. The token and the identity
    cache each sit behind their own lock; no method takes both, and no lock
    is held for longer than a read or an assignment, so the state can be
    shared freely between asyncio tasks and threads.
    """

    def __init__(self, credential: str | None = None) -> None:
        self._credential = credential
        self._xcsrf = ""
        self._xcsrf_lock = threading.Lock()
        self._identity: Identity | None = None
        self._identity_lock = threading.Lock()

    @property
    def credential(self) -> str | None:
        return self._credential

    def require_credential(self) -> str:
        if self._credential is None:
            raise CredentialNotSetError("No credential configured for this client")
        return self._credential

    def cookie_header(self) -> str:
        return f"{CREDENTIAL_COOKIE_NAME}={self.require_credential()}"

    def xcsrf(self) -> str:
        with self._xcsrf_lock:
            return self._xcsrf

    def set_xcsrf(self, token: str) -> None:
        """Overwrite the token; concurrent refreshes resolve as last writer wins."""
        with self._xcsrf_lock:
            self._xcsrf = token

    def cached_identity(self) -> Identity | None:
        with self._identity_lock:
            return self._identity

    def cache_identity(self, identity: Identity) -> None:
        with self._identity_lock:
            self._identity = identity
