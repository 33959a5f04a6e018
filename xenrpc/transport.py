"""Transports: one XenAPI round trip per request, returning a response envelope."""

from __future__ import annotations

import asyncio
import http.client
import logging
import socket
import xmlrpc.client
from typing import Any
from urllib.parse import urlsplit, urlunsplit

import httpx

from xenrpc.envelope import Request, from_jsonrpc
from xenrpc.errors import ConnectionError, ConnectionLost, ProtocolFault, TimeoutError

logger = logging.getLogger("xenrpc")

# Default request timeout in seconds.
_DEFAULT_TIMEOUT = 10.0


class Transport:
    """
    Base transport.

    ``request`` returns the raw envelope mapping (``Status``, ``Value``,
    ``ErrorDescription``) and raises :class:`ConnectionLost` when the peer
    drops the connection mid-call.
    """

    async def request(self, method: str, params: list[Any]) -> dict[str, Any]:
        raise NotImplementedError

    async def reset(self) -> None:
        """Drop the cached connection; the next request reconnects."""

    async def close(self) -> None:
        await self.reset()


# ── XML-RPC over HTTP(S) ───────────────────────


class _TimeoutMixin:
    timeout: float | None = None

    def make_connection(self, host):  # type: ignore[no-untyped-def]
        conn = super().make_connection(host)  # type: ignore[misc]
        conn.timeout = self.timeout
        return conn


class _HTTPTransport(_TimeoutMixin, xmlrpc.client.Transport):
    pass


class _HTTPSTransport(_TimeoutMixin, xmlrpc.client.SafeTransport):
    pass


class XmlRpcTransport(Transport):
    """XML-RPC transport. The blocking proxy call runs in a worker thread."""

    def __init__(self, uri: str, *, timeout: float = _DEFAULT_TIMEOUT) -> None:
        self._uri = uri
        self._timeout = timeout
        self._proxy: xmlrpc.client.ServerProxy | None = None

    def _server_proxy(self) -> xmlrpc.client.ServerProxy:
        if self._proxy is None:
            if urlsplit(self._uri).scheme == "https":
                transport: xmlrpc.client.Transport = _HTTPSTransport()
            else:
                transport = _HTTPTransport()
            transport.timeout = self._timeout  # type: ignore[attr-defined]
            self._proxy = xmlrpc.client.ServerProxy(self._uri, transport=transport, allow_none=True)
        return self._proxy

    async def request(self, method: str, params: list[Any]) -> dict[str, Any]:
        proxy = self._server_proxy()
        try:
            resp = await asyncio.to_thread(_invoke, proxy, method, params)
        except (EOFError, BrokenPipeError, ConnectionResetError, http.client.HTTPException) as exc:
            raise ConnectionLost(str(exc) or type(exc).__name__) from exc
        except socket.timeout as exc:
            raise TimeoutError(f"{method} timed out after {self._timeout}s") from exc
        except xmlrpc.client.Fault as exc:
            raise ProtocolFault(exc.faultCode, exc.faultString) from exc
        except xmlrpc.client.ProtocolError as exc:
            raise ConnectionError(f"HTTP {exc.errcode} {exc.errmsg}") from exc
        except OSError as exc:
            raise ConnectionError(str(exc)) from exc

        return resp if isinstance(resp, dict) else {}

    async def reset(self) -> None:
        proxy, self._proxy = self._proxy, None
        if proxy is not None:
            proxy("close")()


def _invoke(proxy: xmlrpc.client.ServerProxy, method: str, params: list[Any]) -> Any:
    return getattr(proxy, method)(*params)


# ── JSON-RPC over HTTP(S) ──────────────────────


class JsonRpcTransport(Transport):
    """
    JSON-RPC 2.0 transport, POSTing to the host's ``/jsonrpc`` endpoint.

    Replies are normalized into the same envelope the XML-RPC wire returns.
    ``http_transport`` replaces httpx's network layer.
    """

    def __init__(
        self,
        uri: str,
        *,
        timeout: float = _DEFAULT_TIMEOUT,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        parts = urlsplit(uri)
        if not parts.path.rstrip("/").endswith("jsonrpc"):
            parts = parts._replace(path=parts.path.rstrip("/") + "/jsonrpc")
        self._url = urlunsplit(parts)
        self._timeout = timeout
        self._http_transport = http_transport
        self._http: httpx.AsyncClient | None = None

    @property
    def url(self) -> str:
        return self._url

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self._timeout, transport=self._http_transport)
        return self._http

    async def request(self, method: str, params: list[Any]) -> dict[str, Any]:
        req = Request(method=method, params=list(params))
        try:
            resp = await self._client().post(self._url, json=req.to_dict())
            resp.raise_for_status()
        except httpx.TimeoutException as exc:
            raise TimeoutError(f"{method} timed out after {self._timeout}s") from exc
        except httpx.ConnectError as exc:
            raise ConnectionError(str(exc)) from exc
        except (httpx.ReadError, httpx.WriteError, httpx.RemoteProtocolError) as exc:
            raise ConnectionLost(str(exc) or type(exc).__name__) from exc
        except httpx.HTTPStatusError as exc:
            raise ConnectionError(f"HTTP {exc.response.status_code} from {self._url}") from exc
        except httpx.HTTPError as exc:
            raise ConnectionError(str(exc)) from exc

        try:
            reply = resp.json()
        except ValueError:
            logger.warning("undecodable JSON-RPC reply to %s", method)
            return {}
        return from_jsonrpc(reply) if isinstance(reply, dict) else {}

    async def reset(self) -> None:
        http, self._http = self._http, None
        if http is not None:
            await http.aclose()


def make_transport(uri: str, *, timeout: float = _DEFAULT_TIMEOUT, protocol: str = "xmlrpc") -> Transport:
    """Build the transport for ``protocol`` (``xmlrpc`` or ``jsonrpc``)."""
    scheme = urlsplit(uri).scheme
    if scheme not in ("http", "https"):
        raise ValueError(f"unsupported URI scheme {scheme!r} in {uri!r}")
    if protocol == "xmlrpc":
        return XmlRpcTransport(uri, timeout=timeout)
    if protocol == "jsonrpc":
        return JsonRpcTransport(uri, timeout=timeout)
    raise ValueError(f"unsupported protocol {protocol!r}")
