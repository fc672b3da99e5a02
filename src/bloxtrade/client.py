"""Client facade wiring session state, transport, and endpoint services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Self

import httpx

from bloxtrade.economy.service import EconomyService
from bloxtrade.session.state import SessionState
from bloxtrade.settings import ClientSettings
from bloxtrade.transport.executor import RequestExecutor
from bloxtrade.users.service import IdentityResolver

if TYPE_CHECKING:
    from types import TracebackType


class Client:
    """Entry point for API calls made on behalf of one session.

    One instance is safe to share between concurrent tasks. Pass an
    ``http_client`` to control transport configuration (proxies, TLS,
    limits); otherwise one is created from the settings and closed by
    ``aclose()``.
    """

    def __init__(
        self,
        credential: str | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        settings: ClientSettings | None = None,
    ) -> None:
        self.settings = settings or ClientSettings()
        if credential is None:
            credential = self.settings.credential

        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=self.settings.timeout_seconds,
            headers={"User-Agent": self.settings.user_agent},
        )

        self.state = SessionState(credential)
        self.executor = RequestExecutor(self._http, self.state)
        self.users = IdentityResolver(self.executor, self.state, self.settings.users_api_url)
        self.economy = EconomyService(self.executor, self.users, self.settings.economy_api_url)

    @classmethod
    def from_settings(cls, settings: ClientSettings, *, http_client: httpx.AsyncClient | None = None) -> Self:
        return cls(settings.credential, http_client=http_client, settings=settings)

    async def user_id(self) -> int:
        return await self.users.user_id()

    async def username(self) -> str:
        return await self.users.username()

    async def display_name(self) -> str:
        return await self.users.display_name()

    async def refresh_xcsrf(self) -> str:
        """Fetch and store a new anti-forgery token ahead of a burst of writes."""
        return await self.executor.refresh_xcsrf(self.settings.auth_api_url)

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
