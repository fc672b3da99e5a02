from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog

from bloxtrade.session.state import Identity
from bloxtrade.transport.classifier import parse_model

if TYPE_CHECKING:
    from bloxtrade.session.state import SessionState
    from bloxtrade.transport.executor import RequestExecutor

logger = structlog.get_logger()

AUTHENTICATED_USER_PATH = "/v1/users/authenticated"


class IdentityResolver:
    """Lazily fetch and cache the identity behind the session credential.

    The identity is assumed fixed for the life of the credential, so once a
    fetch succeeds it is never invalidated.
    Concurrent first callers may each hit the network; the last response
    stored wins.
    """

    def __init__(self, executor: RequestExecutor, state: SessionState, users_api_url: str) -> None:
        self._executor = executor
        self._state = state
        self._users_api_url = users_api_url

    async def resolve(self) -> Identity:
        cached = self._state.cached_identity()
        if cached is not None:
            return cached

        self._state.require_credential()
        request = httpx.Request("GET", f"{self._users_api_url}{AUTHENTICATED_USER_PATH}")
        response = await self._executor.execute_readonly(request)
        identity = parse_model(response, Identity)

        self._state.cache_identity(identity)
        logger.info("identity cached", user_id=identity.user_id, username=identity.username)
        return identity

    async def user_id(self) -> int:
        return (await self.resolve()).user_id

    async def username(self) -> str:
        return (await self.resolve()).username

    async def display_name(self) -> str:
        return (await self.resolve()).display_name
