import asyncio

import httpx
import pytest

from bloxtrade.session.state import SessionState
from bloxtrade.tests.helpers.transport import (
    AUTH_URL,
    TEST_CREDENTIAL,
    ScriptedTransport,
    stale_token_response,
)
from bloxtrade.transport.errors import (
    CredentialNotSetError,
    InvalidCredentialError,
    RateLimitedError,
    RemoteError,
    StaleTokenError,
    TokenHeaderMissingError,
    TransportError,
)
from bloxtrade.transport.executor import RequestExecutor

WRITE_URL = "https://economy.test/v1/assets/1/resellable-copies/2"


def _executor(*responses: httpx.Response, credential: str | None = TEST_CREDENTIAL):
    transport = ScriptedTransport(list(responses))
    state = SessionState(credential)
    return RequestExecutor(transport.as_http_client(), state), state, transport


def _build_write() -> httpx.Request:
    return httpx.Request("PATCH", WRITE_URL, json={"price": 100})


class TestExecuteReadonly:
    @pytest.mark.asyncio
    async def test_attaches_session_cookie(self):
        executor, _, transport = _executor(httpx.Response(200, json={}))
        await executor.execute_readonly(httpx.Request("GET", "https://users.test/v1/x"))
        assert transport.requests[0].headers["Cookie"] == f".ROBLOSECURITY={TEST_CREDENTIAL}"

    @pytest.mark.asyncio
    async def test_unauthenticated_request_needs_no_credential(self):
        executor, _, transport = _executor(httpx.Response(200, json={}), credential=None)
        await executor.execute_readonly(httpx.Request("GET", "https://users.test/v1/x"), authenticated=False)
        assert "Cookie" not in transport.requests[0].headers

    @pytest.mark.asyncio
    async def test_missing_credential_fails_before_sending(self):
        executor, _, transport = _executor(credential=None)
        with pytest.raises(CredentialNotSetError):
            await executor.execute_readonly(httpx.Request("GET", "https://users.test/v1/x"))
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_stale_token_is_not_retried_on_readonly_calls(self):
        executor, state, transport = _executor(stale_token_response("new"))
        with pytest.raises(StaleTokenError):
            await executor.execute_readonly(httpx.Request("GET", "https://users.test/v1/x"))
        assert len(transport.requests) == 1
        assert state.xcsrf() == ""

    @pytest.mark.asyncio
    async def test_transport_failure_is_wrapped(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        executor = RequestExecutor(httpx.AsyncClient(transport=httpx.MockTransport(handler)), SessionState("c"))
        with pytest.raises(TransportError) as exc_info:
            await executor.execute_readonly(httpx.Request("GET", "https://users.test/v1/x"))
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout_is_a_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        executor = RequestExecutor(httpx.AsyncClient(transport=httpx.MockTransport(handler)), SessionState("c"))
        with pytest.raises(TransportError):
            await executor.execute_readonly(httpx.Request("GET", "https://users.test/v1/x"))


class TestExecuteWithRetry:
    @pytest.mark.asyncio
    async def test_success_on_first_attempt(self):
        executor, state, transport = _executor(httpx.Response(200, json={}))
        state.set_xcsrf("current")

        response = await executor.execute_with_retry(_build_write)

        assert response.status_code == 200
        assert len(transport.requests) == 1
        assert transport.requests[0].headers["x-csrf-token"] == "current"

    @pytest.mark.asyncio
    async def test_stale_then_success_makes_two_attempts(self):
        executor, state, transport = _executor(stale_token_response("fresh"), httpx.Response(200, json={}))

        response = await executor.execute_with_retry(_build_write)

        assert response.status_code == 200
        assert len(transport.requests) == 2
        assert transport.requests[0].headers["x-csrf-token"] == ""
        assert transport.requests[1].headers["x-csrf-token"] == "fresh"
        assert state.xcsrf() == "fresh"

    @pytest.mark.asyncio
    async def test_retry_resends_identical_request(self):
        executor, _, transport = _executor(stale_token_response("fresh"), httpx.Response(200, json={}))

        await executor.execute_with_retry(_build_write)

        first, second = transport.requests
        assert first.method == second.method == "PATCH"
        assert first.url == second.url
        assert first.content == second.content

    @pytest.mark.asyncio
    async def test_two_stale_tokens_raise_without_third_attempt(self):
        executor, state, transport = _executor(stale_token_response("first"), stale_token_response("second"))

        with pytest.raises(StaleTokenError) as exc_info:
            await executor.execute_with_retry(_build_write)

        assert exc_info.value.token == "second"
        assert len(transport.requests) == 2
        # Only the first refresh is applied; the surfaced token is left to the caller.
        assert state.xcsrf() == "first"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("response", "error_type"),
        [
            (httpx.Response(401), InvalidCredentialError),
            (httpx.Response(429), RateLimitedError),
            (httpx.Response(403, json={"errors": [{"code": 4, "message": "nope"}]}), RemoteError),
            (httpx.Response(403, content=b""), TokenHeaderMissingError),
        ],
    )
    async def test_other_errors_are_not_retried(self, response, error_type):
        executor, _, transport = _executor(response)
        with pytest.raises(error_type):
            await executor.execute_with_retry(_build_write)
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_transport_failure_is_not_retried(self):
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            raise httpx.ConnectError("down", request=request)

        executor = RequestExecutor(httpx.AsyncClient(transport=httpx.MockTransport(handler)), SessionState("c"))
        with pytest.raises(TransportError):
            await executor.execute_with_retry(_build_write)
        assert calls == 1

    @pytest.mark.asyncio
    async def test_missing_credential_fails_before_sending(self):
        executor, _, transport = _executor(credential=None)
        with pytest.raises(CredentialNotSetError):
            await executor.execute_with_retry(_build_write)
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_builder_called_once_per_attempt(self):
        executor, _, _ = _executor(stale_token_response("fresh"), httpx.Response(200, json={}))
        built = 0

        def build() -> httpx.Request:
            nonlocal built
            built += 1
            return _build_write()

        await executor.execute_with_retry(build)
        assert built == 2

    @pytest.mark.asyncio
    async def test_retry_uses_own_refresh_over_token_written_in_flight(self):
        state = SessionState(TEST_CREDENTIAL)
        seen: list[str] = []

        async def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.headers["x-csrf-token"])
            if len(seen) == 1:
                # Another caller refreshes while this attempt is in flight.
                state.set_xcsrf("from-other-call")
                await asyncio.sleep(0)
                return stale_token_response("from-this-call")
            return httpx.Response(200, json={})

        executor = RequestExecutor(httpx.AsyncClient(transport=httpx.MockTransport(handler)), state)
        await executor.execute_with_retry(_build_write)

        assert seen == ["", "from-this-call"]
        assert state.xcsrf() == "from-this-call"

    @pytest.mark.asyncio
    async def test_concurrent_writes_each_retry_once(self):
        state = SessionState(TEST_CREDENTIAL)
        attempts: dict[str, int] = {}

        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(0)
            path = request.url.path
            attempts[path] = attempts.get(path, 0) + 1
            if request.headers["x-csrf-token"] == "":
                return stale_token_response("shared-fresh")
            return httpx.Response(200, json={})

        executor = RequestExecutor(httpx.AsyncClient(transport=httpx.MockTransport(handler)), state)

        def builder(uaid: int):
            return lambda: httpx.Request("PATCH", f"https://economy.test/v1/assets/1/resellable-copies/{uaid}")

        await asyncio.gather(*(executor.execute_with_retry(builder(uaid)) for uaid in range(5)))

        assert all(count <= 2 for count in attempts.values())
        assert len(attempts) == 5
        assert state.xcsrf() == "shared-fresh"


class TestRefreshXcsrf:
    @pytest.mark.asyncio
    async def test_stores_token_from_logout_rejection(self):
        executor, state, transport = _executor(stale_token_response("prefetched"))

        token = await executor.refresh_xcsrf(AUTH_URL)

        assert token == "prefetched"
        assert state.xcsrf() == "prefetched"
        assert transport.requests[0].method == "POST"
        assert str(transport.requests[0].url) == f"{AUTH_URL}/v2/logout"

    @pytest.mark.asyncio
    async def test_missing_header_raises(self):
        executor, state, _ = _executor(httpx.Response(403, content=b""))
        with pytest.raises(TokenHeaderMissingError):
            await executor.refresh_xcsrf(AUTH_URL)
        assert state.xcsrf() == ""

    @pytest.mark.asyncio
    async def test_other_failures_are_classified(self):
        executor, _, _ = _executor(httpx.Response(401))
        with pytest.raises(InvalidCredentialError):
            await executor.refresh_xcsrf(AUTH_URL)

    @pytest.mark.parametrize(
        ("status", "error_type"),
        [(401, InvalidCredentialError), (429, RateLimitedError)],
    )
    @pytest.mark.asyncio
    async def test_error_status_with_token_header_is_not_a_refresh(self, status, error_type):
        executor, state, _ = _executor(httpx.Response(status, headers={"x-csrf-token": "t"}))
        with pytest.raises(error_type):
            await executor.refresh_xcsrf(AUTH_URL)
        assert state.xcsrf() == ""
