"""Send requests through the shared session and classify the results.

Read-only calls are sent once. State-mutating calls go through
``execute_with_retry``: a stale anti-forgery token is replaced with the one
the service handed back and the request is rebuilt and sent exactly one more
time. A second stale-token rejection is raised to the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from http import HTTPStatus

import httpx
import structlog

from bloxtrade.transport.classifier import classify_response
from bloxtrade.transport.errors import StaleTokenError, TokenHeaderMissingError, TransportError
from bloxtrade.transport.headers import XCSRF_HEADER

if TYPE_CHECKING:
    from collections.abc import Callable

    from bloxtrade.session.state import SessionState

logger = structlog.get_logger()

# One original attempt plus one after a token refresh.
MAX_ATTEMPTS = 2

LOGOUT_PATH = "/v2/logout"


class RequestExecutor:
    def __init__(self, http_client: httpx.AsyncClient, state: SessionState) -> None:
        self._http = http_client
        self._state = state

    async def _send(self, request: httpx.Request, attempt: int = 1) -> httpx.Response:
        """Send one request, wrapping transport failures as TransportError."""
        log = logger.bind(method=request.method, host=request.url.host, path=request.url.path, attempt=attempt)
        try:
            response = await self._http.send(request)
        except httpx.RequestError as e:
            log.debug("request failed", error=type(e).__name__)
            raise TransportError(f"{request.method} {request.url.path} failed: {e}") from e
        log.debug("response received", status=response.status_code)
        return response

    def _authenticate(self, request: httpx.Request) -> httpx.Request:
        request.headers["Cookie"] = self._state.cookie_header()
        return request

    async def execute_readonly(self, request: httpx.Request, *, authenticated: bool = True) -> httpx.Response:
        """Send a request that needs no anti-forgery token. Never retried."""
        if authenticated:
            self._authenticate(request)
        return classify_response(await self._send(request))

    async def execute_with_retry(self, build_request: Callable[[], httpx.Request]) -> httpx.Response:
        """Send a state-mutating request, refreshing a stale token at most once.

        ``build_request`` is called once per attempt so that each attempt gets
        a fresh request carrying the current token.
        """
        self._state.require_credential()

        try:
            return await self._attempt_with_token(build_request, attempt=1)
        except StaleTokenError as e:
            self._state.set_xcsrf(e.token)
            logger.info("x-csrf-token refreshed")

        try:
            return await self._attempt_with_token(build_request, attempt=MAX_ATTEMPTS)
        except StaleTokenError:
            logger.warning("x-csrf-token rejected after refresh")
            raise

    async def _attempt_with_token(self, build_request: Callable[[], httpx.Request], attempt: int) -> httpx.Response:
        request = self._authenticate(build_request())
        request.headers[XCSRF_HEADER] = self._state.xcsrf()
        return classify_response(await self._send(request, attempt))

    async def refresh_xcsrf(self, auth_api_url: str) -> str:
        """Fetch a fresh token without performing any other action.

        The logout endpoint rejects a token-less POST with a 403 carrying a
        new token, which is stored and returned. The session is not logged out.
        Any other error status is raised as classified, even if it carries
        a token header.
        """
        request = self._authenticate(httpx.Request("POST", f"{auth_api_url}{LOGOUT_PATH}"))
        response = await self._send(request)
        if response.status_code != HTTPStatus.FORBIDDEN:
            classify_response(response)
        token = response.headers.get(XCSRF_HEADER)
        if token is None:
            classify_response(response)
            raise TokenHeaderMissingError(f"Logout endpoint answered {response.status_code} without an x-csrf-token")
        self._state.set_xcsrf(token)
        logger.info("x-csrf-token refreshed", source="logout")
        return token
