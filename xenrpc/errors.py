"""xenrpc SDK error hierarchy."""

from __future__ import annotations

from typing import Iterable


class XenRPCError(Exception):
    """Base error for all xenrpc errors."""

    def __init__(self, message: str, code: str = "") -> None:
        super().__init__(message)
        self.code = code


class ConnectionError(XenRPCError):  # noqa: A001
    """The transport could not complete a round trip."""

    def __init__(self, message: str = "connection failed") -> None:
        super().__init__(message)


class ConnectionLost(ConnectionError):
    """The peer closed the connection mid-call (EOF, broken pipe, reset)."""

    def __init__(self, message: str = "connection lost") -> None:
        super().__init__(message)


class TimeoutError(XenRPCError):  # noqa: A001
    """Request timed out waiting for a response."""

    def __init__(self, message: str = "request timed out") -> None:
        super().__init__(message)


class LoginRequired(XenRPCError):
    """
    A call needs an authenticated session and no login has ever succeeded,
    so there is nothing to replay.

    Log in with one of the ``login_*`` methods and retry the request.
    """

    def __init__(self, message: str = "login required") -> None:
        super().__init__(message)


class SessionInvalid(XenRPCError):
    """
    The API rejected the session token.

    The client handles this internally by logging in again and retrying the
    call once; it only reaches the caller when the retry is rejected too.
    """

    def __init__(self, details: Iterable[str] = ()) -> None:
        self.details = list(details)
        super().__init__(f"SESSION_INVALID {self.details}", code="SESSION_INVALID")


class MalformedResponse(XenRPCError):
    """The response envelope broke the API contract. Never retried."""


class ResponseMissingStatusField(MalformedResponse):
    def __init__(self, message: str = "response is missing the Status field") -> None:
        super().__init__(message)


class ResponseMissingValueField(MalformedResponse):
    def __init__(self, message: str = "successful response is missing the Value field") -> None:
        super().__init__(message)


class ResponseMissingErrorDescriptionField(MalformedResponse):
    def __init__(self, message: str = "failed response is missing the ErrorDescription field") -> None:
        super().__init__(message)


class ProtocolFault(MalformedResponse):
    """The server answered with an XML-RPC fault instead of an envelope."""

    def __init__(self, fault_code: int, fault_string: str) -> None:
        self.fault_string = fault_string
        super().__init__(f"XML-RPC fault {fault_code}: {fault_string}", code=str(fault_code))
