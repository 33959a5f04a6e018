"""Shared fixtures: an in-memory transport and a client wired to it."""

from __future__ import annotations

from typing import Any

import pytest

from xenrpc.client import Client
from xenrpc.transport import Transport


def ok(value: Any) -> dict[str, Any]:
    return {"Status": "Success", "Value": value}


def failure(*desc: str) -> dict[str, Any]:
    return {"Status": "Failure", "ErrorDescription": list(desc)}


class MockTransport(Transport):
    """
    A mock transport that records requests and replays scripted replies.

    Each method has a list of replies consumed in order; the last one
    repeats. A reply that is an exception instance is raised instead.
    """

    def __init__(self) -> None:
        self._responses: dict[str, list[Any]] = {}
        self._requests: list[tuple[str, list[Any]]] = []
        self.resets = 0
        self.closed = False

    async def request(self, method: str, params: list[Any]) -> dict[str, Any]:
        self._requests.append((method, list(params)))
        queue = self._responses.get(method)
        if not queue:
            return ok("")
        resp = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(resp, BaseException):
            raise resp
        return resp

    async def reset(self) -> None:
        self.resets += 1

    async def close(self) -> None:
        self.closed = True

    def set_response(self, method: str, value: Any) -> None:
        """Configure a successful reply for a method."""
        self._responses[method] = [ok(value)]

    def set_error(self, method: str, *desc: str) -> None:
        """Configure a failure reply for a method."""
        self._responses[method] = [failure(*desc)]

    def script(self, method: str, *replies: Any) -> None:
        """Configure a sequence of raw replies (envelopes or exceptions)."""
        self._responses[method] = list(replies)

    def methods(self) -> list[str]:
        return [m for m, _ in self._requests]


@pytest.fixture
def transport() -> MockTransport:
    t = MockTransport()
    t.script(
        "session.login_with_password",
        ok("OpaqueRef:session-1"),
        ok("OpaqueRef:session-2"),
        ok("OpaqueRef:session-3"),
    )
    return t


@pytest.fixture
def client(transport: MockTransport) -> Client:
    return Client("http://xenapi.test/", transport=transport, backoff=0)
