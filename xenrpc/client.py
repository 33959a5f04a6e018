"""xenrpc client — session handling and dynamic dispatch of XenAPI calls."""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
from typing import Any, Callable
from urllib.parse import urlsplit, urlunsplit

from xenrpc.dispatcher import AsyncDispatcher, Dispatcher
from xenrpc.envelope import Response
from xenrpc.errors import (
    ConnectionLost,
    LoginRequired,
    ResponseMissingErrorDescriptionField,
    ResponseMissingStatusField,
    ResponseMissingValueField,
    SessionInvalid,
)
from xenrpc.failures import failure_from_description
from xenrpc.transport import _DEFAULT_TIMEOUT, Transport, make_transport

logger = logging.getLogger("xenrpc")

# Reconnect attempts per call after the connection drops.
_DEFAULT_MAX_RETRIES = 3

# Reconnection backoff.
_INITIAL_BACKOFF = 0.5
_MAX_BACKOFF = 5.0


class Client:
    """
    Client for the XenAPI. Any attribute that is not one of the client's own
    operations starts a remote method name.

    Example::

        client = Client("http://xenapi.test")
        await client.login_with_password("root", "password")
        vms = await client.VM.get_all()

    Authentication
        ``login*`` methods are sent to the ``session`` class on the wire
        (``session.login_with_password``). The client keeps the returned
        session token, passes it as the first argument of every later call,
        and replays the login when the API reports ``SESSION_INVALID``.

    Running code after login
        A hook registered with :meth:`after_login` runs after every
        successful login, including automatic relogins. Use it to
        re-register for events on a fresh session::

            @client.after_login
            async def register(c):
                await c.event.register(["vm"])

    Asynchronous methods
        ``client.Async.VM.clean_shutdown(ref)`` (or ``client.async_``) sends
        ``Async.VM.clean_shutdown`` and returns a task reference; follow it
        through the ``task`` class.
    """

    def __init__(
        self,
        uri: str,
        timeout: float = _DEFAULT_TIMEOUT,
        *,
        max_retries: int = _DEFAULT_MAX_RETRIES,
        backoff: float = _INITIAL_BACKOFF,
        protocol: str = "xmlrpc",
        transport: Transport | None = None,
    ) -> None:
        parts = urlsplit(uri)
        if parts.path == "":
            parts = parts._replace(path="/")
        self._uri = urlunsplit(parts)
        self._timeout = timeout
        self._max_retries = max_retries
        self._backoff = backoff
        self._transport = transport if transport is not None else make_transport(
            self._uri, timeout=timeout, protocol=protocol
        )

        self._session: str | None = None
        self._login_method: str | None = None
        self._login_args: tuple[Any, ...] = ()
        self._after_login: Callable[..., Any] | None = None
        self._logging_in = False

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._uri}>"

    # ── Lifecycle ──────────────────────────────

    @property
    def session_token(self) -> str | None:
        return self._session

    def after_login(self, callback: Callable[..., Any]) -> Callable[..., Any]:
        """
        Register the hook run after every successful login.

        The hook receives the client if it takes a positional argument and
        nothing otherwise; it may be a coroutine function. Returns the hook
        so this can be used as a decorator.
        """
        self._after_login = callback
        return callback

    async def logout(self) -> None:
        """End the current session, if any. The login can still be replayed."""
        if self._session is None:
            return
        session, self._session = self._session, None
        await self._do_call("session.logout", [session])
        logger.info("logged out of %s", self._uri)

    async def close(self) -> None:
        """Log out and close the transport."""
        try:
            await self.logout()
        finally:
            await self._transport.close()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ── Dispatch ───────────────────────────────

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        if name.startswith("login"):
            return functools.partial(self._login, name)
        if name.lower().startswith("async"):
            return AsyncDispatcher(self, "_call")
        return Dispatcher(self, name, "_call")

    async def _call(self, method: str, *args: Any) -> Any:
        relogged_in = False
        reconnects = 0
        while True:
            params = [self._session, *args] if self._session is not None else list(args)
            try:
                return await self._do_call(method, params)
            except SessionInvalid:
                self._session = None
                # Never relogin from inside a login, including the after-login hook.
                if relogged_in or self._logging_in:
                    raise
                logger.warning("session invalid during %s, logging in again", method)
                await self._relogin()
                relogged_in = True
            except ConnectionLost:
                if reconnects >= self._max_retries:
                    logger.error("%s failed after %d reconnect attempts", method, reconnects)
                    raise
                reconnects += 1
                delay = min(self._backoff * (2 ** (reconnects - 1)), _MAX_BACKOFF)
                logger.warning("connection to %s lost during %s, reconnecting in %.1fs …", self._uri, method, delay)
                await self._transport.reset()
                await asyncio.sleep(delay)

    # ── Session ────────────────────────────────

    async def _login(self, method: str, *args: Any) -> bool:
        self._logging_in = True
        try:
            self._session = await self._do_call(f"session.{method}", list(args))
            self._login_method = method
            self._login_args = args
            logger.info("logged in to %s with session.%s", self._uri, method)
            await self._run_after_login()
        finally:
            self._logging_in = False
        return True

    async def _relogin(self) -> None:
        if self._login_method is None:
            raise LoginRequired()
        await self._login(self._login_method, *self._login_args)

    async def _run_after_login(self) -> None:
        hook = self._after_login
        if hook is None:
            return
        result = hook(self) if _takes_argument(hook) else hook()
        if inspect.isawaitable(result):
            await result

    # ── Internals ──────────────────────────────

    async def _do_call(self, method: str, params: list[Any]) -> Any:
        logger.debug("calling %s", method)
        resp = Response.from_dict(await self._transport.request(method, params))

        if resp.status is None:
            raise ResponseMissingStatusField()
        if resp.succeeded:
            if not resp.has_value:
                raise ResponseMissingValueField()
            return resp.value

        desc = resp.error_description
        if desc is None:
            raise ResponseMissingErrorDescriptionField()
        if desc and desc[0] == "SESSION_INVALID":
            raise SessionInvalid(desc[1:])
        raise failure_from_description(desc)


def _takes_argument(fn: Callable[..., Any]) -> bool:
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return True
    return any(
        p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL)
        for p in params
    )
