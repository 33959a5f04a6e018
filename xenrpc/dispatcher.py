"""Namespace accumulators that turn attribute chains into XenAPI method names."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Awaitable

if TYPE_CHECKING:
    from xenrpc.client import Client


class Dispatcher:
    """
    Builds a dotted method name one attribute at a time.

    ``client.VM`` is a Dispatcher for ``VM``; ``.get_all`` extends it to
    ``VM.get_all``; calling it sends ``VM.get_all`` through the client's
    ``sender`` method with the given arguments.
    """

    __slots__ = ("_client", "_prefix", "_sender")

    def __init__(self, client: Client, prefix: str, sender: str) -> None:
        self._client = client
        self._prefix = prefix
        self._sender = sender

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._prefix}>"

    def __getattr__(self, name: str) -> Dispatcher:
        if name.startswith("__"):
            raise AttributeError(name)
        return Dispatcher(self._client, f"{self._prefix}.{name}", self._sender)

    def __call__(self, *args: Any) -> Awaitable[Any]:
        return getattr(self._client, self._sender)(self._prefix, *args)


class AsyncDispatcher:
    """Routes ``client.Async.<ns>...`` to the ``Async.<ns>`` namespace."""

    __slots__ = ("_client", "_sender")

    def __init__(self, client: Client, sender: str) -> None:
        self._client = client
        self._sender = sender

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"

    def __getattr__(self, name: str) -> Dispatcher:
        if name.startswith("__"):
            raise AttributeError(name)
        return Dispatcher(self._client, f"Async.{name}", self._sender)
