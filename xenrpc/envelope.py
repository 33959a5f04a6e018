"""XenAPI response envelopes and JSON-RPC request frames."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Status(str, Enum):
    SUCCESS = "Success"
    FAILURE = "Failure"


@dataclass
class Response:
    """
    A decoded response envelope.

    ``status`` is ``None`` when the field was absent. ``has_value`` tells a
    missing ``Value`` apart from a ``Value`` that is ``None``.
    """

    status: str | None = None
    value: Any = None
    has_value: bool = False
    error_description: list[str] | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == Status.SUCCESS

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Response:
        """Deserialise from the mapping returned by a transport."""
        desc = d.get("ErrorDescription")
        return cls(
            status=d.get("Status"),
            value=d.get("Value"),
            has_value="Value" in d,
            error_description=list(desc) if desc is not None else None,
        )


@dataclass
class Request:
    id: str = field(default_factory=lambda: _generate_request_id())
    method: str = ""
    params: list[Any] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a JSON-RPC 2.0 request object."""
        return {"jsonrpc": "2.0", "id": self.id, "method": self.method, "params": self.params}


def from_jsonrpc(d: dict[str, Any]) -> dict[str, Any]:
    """
    Convert a JSON-RPC reply into envelope form.

    A ``result`` becomes a ``Success`` envelope. An ``error`` becomes a
    ``Failure`` whose description is the error message (the XenAPI error
    code) followed by the entries of ``error.data``.
    """
    if "result" in d:
        return {"Status": Status.SUCCESS.value, "Value": d["result"]}
    err = d.get("error")
    if isinstance(err, dict):
        data = err.get("data") or []
        if not isinstance(data, list):
            data = [data]
        return {
            "Status": Status.FAILURE.value,
            "ErrorDescription": [str(err.get("message", ""))] + [str(x) for x in data],
        }
    return {}


def _generate_request_id() -> str:
    """Generate a simple timestamp-based request ID."""
    return f"{time.time_ns()}"
