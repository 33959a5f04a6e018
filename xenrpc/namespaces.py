"""
Typed wrappers for commonly used XenAPI classes.

These sit on top of the dynamic path and send every call through
``Client._call``, so session injection and relogin apply unchanged::

    api = bind(client)
    for ref in await api.VM.get_all():
        record = await api.VM.get_record(ref)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from xenrpc.client import Client


class Namespace:
    """A XenAPI class bound to a client."""

    name = ""

    def __init__(self, client: Client, name: str | None = None) -> None:
        self._client = client
        if name is not None:
            self.name = name

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"

    async def call(self, method: str, *args: Any) -> Any:
        return await self._client._call(f"{self.name}.{method}", *args)

    async def call_async(self, method: str, *args: Any) -> str:
        """Start ``method`` as a server-side task. Returns the task ref."""
        return await self._client._call(f"Async.{self.name}.{method}", *args)

    async def get_all(self) -> list[str]:
        return await self.call("get_all")

    async def get_all_records(self) -> dict[str, dict[str, Any]]:
        return await self.call("get_all_records")

    async def get_record(self, ref: str) -> dict[str, Any]:
        return await self.call("get_record", ref)

    async def get_by_uuid(self, uuid: str) -> str:
        return await self.call("get_by_uuid", uuid)

    async def get_uuid(self, ref: str) -> str:
        return await self.call("get_uuid", ref)


class NamedNamespace(Namespace):
    async def get_by_name_label(self, label: str) -> list[str]:
        return await self.call("get_by_name_label", label)

    async def get_name_label(self, ref: str) -> str:
        return await self.call("get_name_label", ref)


class Session(Namespace):
    name = "session"

    async def get_this_host(self, session: str) -> str:
        return await self.call("get_this_host", session)

    async def get_this_user(self, session: str) -> str:
        return await self.call("get_this_user", session)


class VM(NamedNamespace):
    name = "VM"

    async def get_power_state(self, ref: str) -> str:
        return await self.call("get_power_state", ref)

    async def start(self, ref: str, start_paused: bool = False, force: bool = False) -> None:
        await self.call("start", ref, start_paused, force)

    async def clean_shutdown(self, ref: str) -> None:
        await self.call("clean_shutdown", ref)

    async def hard_shutdown(self, ref: str) -> None:
        await self.call("hard_shutdown", ref)

    async def clean_reboot(self, ref: str) -> None:
        await self.call("clean_reboot", ref)

    async def snapshot(self, ref: str, new_name: str) -> str:
        return await self.call("snapshot", ref, new_name)


class Host(NamedNamespace):
    name = "host"

    async def get_servertime(self, ref: str) -> Any:
        return await self.call("get_servertime", ref)

    async def get_software_version(self, ref: str) -> dict[str, str]:
        return await self.call("get_software_version", ref)


class Pool(Namespace):
    name = "pool"

    async def get_master(self, ref: str) -> str:
        return await self.call("get_master", ref)


class Task(NamedNamespace):
    name = "task"

    async def get_status(self, ref: str) -> str:
        return await self.call("get_status", ref)

    async def get_progress(self, ref: str) -> float:
        return await self.call("get_progress", ref)

    async def get_result(self, ref: str) -> str:
        return await self.call("get_result", ref)

    async def get_error_info(self, ref: str) -> list[str]:
        return await self.call("get_error_info", ref)

    async def cancel(self, ref: str) -> None:
        await self.call("cancel", ref)

    async def destroy(self, ref: str) -> None:
        await self.call("destroy", ref)


class Event(Namespace):
    name = "event"

    async def register(self, classes: list[str]) -> None:
        await self.call("register", classes)

    async def unregister(self, classes: list[str]) -> None:
        await self.call("unregister", classes)

    async def next(self) -> list[dict[str, Any]]:
        return await self.call("next")

    async def from_(self, classes: list[str], token: str, timeout: float) -> dict[str, Any]:
        return await self.call("from", classes, token, timeout)


class API:
    """One typed namespace per well-known class, all bound to one client."""

    def __init__(self, client: Client) -> None:
        self.session = Session(client)
        self.VM = VM(client)
        self.host = Host(client)
        self.pool = Pool(client)
        self.task = Task(client)
        self.event = Event(client)


def bind(client: Client) -> API:
    return API(client)
