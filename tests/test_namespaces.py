"""Unit tests for the typed namespace layer."""

from __future__ import annotations

from conftest import MockTransport, failure, ok
from xenrpc.client import Client
from xenrpc.namespaces import VM, Namespace, bind


class TestNamespaces:
    async def test_typed_call_uses_session(self, client: Client, transport: MockTransport) -> None:
        transport.set_response("VM.get_all", ["OpaqueRef:vm-1"])
        await client.login_with_password("root", "pw")
        api = bind(client)

        assert await api.VM.get_all() == ["OpaqueRef:vm-1"]
        assert transport._requests[-1] == ("VM.get_all", ["OpaqueRef:session-1"])

    async def test_start_sends_flags(self, client: Client, transport: MockTransport) -> None:
        await client.login_with_password("root", "pw")
        await bind(client).VM.start("OpaqueRef:vm-1")
        assert transport._requests[-1] == (
            "VM.start",
            ["OpaqueRef:session-1", "OpaqueRef:vm-1", False, False],
        )

    async def test_call_async_prefixes_namespace(self, client: Client, transport: MockTransport) -> None:
        transport.set_response("Async.VM.clean_shutdown", "OpaqueRef:task-1")
        await client.login_with_password("root", "pw")

        task = await bind(client).VM.call_async("clean_shutdown", "OpaqueRef:vm-1")

        assert task == "OpaqueRef:task-1"
        assert transport._requests[-1][0] == "Async.VM.clean_shutdown"

    async def test_task_follow_up(self, client: Client, transport: MockTransport) -> None:
        transport.set_response("task.get_status", "success")
        transport.set_response("task.get_result", "<value>OpaqueRef:vm-1</value>")
        api = bind(client)

        assert await api.task.get_status("OpaqueRef:task-1") == "success"
        assert await api.task.get_result("OpaqueRef:task-1") == "<value>OpaqueRef:vm-1</value>"

    async def test_event_from_uses_wire_name(self, client: Client, transport: MockTransport) -> None:
        await bind(client).event.from_(["vm"], "", 30.0)
        assert transport._requests[-1] == ("event.from", [["vm"], "", 30.0])

    async def test_typed_calls_are_renewed(self, client: Client, transport: MockTransport) -> None:
        transport.script("host.get_servertime", failure("SESSION_INVALID"), ok("20261018T00:00:00Z"))
        await client.login_with_password("root", "pw")

        assert await bind(client).host.get_servertime("OpaqueRef:host-1") == "20261018T00:00:00Z"
        assert transport._requests[-1][1][0] == "OpaqueRef:session-2"

    async def test_custom_namespace(self, client: Client, transport: MockTransport) -> None:
        sr = Namespace(client, "SR")
        await sr.get_record("OpaqueRef:sr-1")
        assert repr(sr) == "<Namespace SR>"
        assert transport._requests[-1] == ("SR.get_record", ["OpaqueRef:sr-1"])

    def test_class_names(self, client: Client) -> None:
        api = bind(client)
        assert isinstance(api.VM, VM)
        assert (api.session.name, api.host.name, api.pool.name) == ("session", "host", "pool")
