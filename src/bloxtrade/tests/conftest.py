"""Shared fixtures for client tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from bloxtrade.client import Client
from bloxtrade.tests.helpers.transport import TEST_CREDENTIAL, ScriptedTransport, make_test_settings

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx


@pytest.fixture
def make_client() -> Callable[..., tuple[Client, ScriptedTransport]]:
    """Build a Client whose transport replays the given responses in order."""

    def _make(*responses: httpx.Response, credential: str | None = TEST_CREDENTIAL) -> tuple[Client, ScriptedTransport]:
        transport = ScriptedTransport(list(responses))
        client = Client(credential, http_client=transport.as_http_client(), settings=make_test_settings())
        return client, transport

    return _make
