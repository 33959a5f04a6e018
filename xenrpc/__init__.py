"""
xenrpc — asyncio client for the XenAPI.

Example::

    from xenrpc import Client

    async with Client("https://xenserver.example.com") as client:
        await client.login_with_password("root", "password")

        for ref in await client.VM.get_all():
            print(await client.VM.get_name_label(ref))

        task = await client.Async.VM.clean_shutdown(ref)
        print(await client.task.get_status(task))
"""

from xenrpc.client import Client
from xenrpc.dispatcher import AsyncDispatcher, Dispatcher
from xenrpc.errors import (
    ConnectionError,
    ConnectionLost,
    LoginRequired,
    MalformedResponse,
    ProtocolFault,
    ResponseMissingErrorDescriptionField,
    ResponseMissingStatusField,
    ResponseMissingValueField,
    SessionInvalid,
    TimeoutError,
    XenRPCError,
)
from xenrpc.failures import GenericError, exception_class_from_desc
from xenrpc.namespaces import bind
from xenrpc.transport import JsonRpcTransport, Transport, XmlRpcTransport, make_transport

__all__ = [
    "Client",
    "Dispatcher",
    "AsyncDispatcher",
    "XenRPCError",
    "ConnectionError",
    "ConnectionLost",
    "TimeoutError",
    "LoginRequired",
    "SessionInvalid",
    "MalformedResponse",
    "ProtocolFault",
    "ResponseMissingStatusField",
    "ResponseMissingValueField",
    "ResponseMissingErrorDescriptionField",
    "GenericError",
    "exception_class_from_desc",
    "bind",
    "Transport",
    "XmlRpcTransport",
    "JsonRpcTransport",
    "make_transport",
]
