"""
Basic xenrpc example.

Demonstrates logging in, listing VMs, registering for events after every
login, and starting an asynchronous task.

Prerequisites:
    A XenServer / XCP-ng host reachable over HTTPS.

    XENAPI_URL=https://xenserver.example.com XENAPI_PASSWORD=... \\
        python examples/basic.py
"""

import asyncio
import logging
import os

from xenrpc import Client, bind
from xenrpc.failures import GenericError

SERVER_URL = os.environ.get("XENAPI_URL", "https://localhost")
USERNAME = os.environ.get("XENAPI_USER", "root")
PASSWORD = os.environ.get("XENAPI_PASSWORD", "")


async def main() -> None:
    logging.basicConfig(level=logging.INFO)

    async with Client(SERVER_URL, timeout=30) as client:
        # ── 1. Re-register for events on every fresh session ──
        @client.after_login
        async def register(c: Client) -> None:
            await c.event.register(["vm", "task"])

        # ── 2. Log in ──────────────────────────────────
        await client.login_with_password(USERNAME, PASSWORD, "2.0", "xenrpc-example")
        print(f"Logged in, session: {client.session_token}")

        # ── 3. Dynamic calls ───────────────────────────
        records = await client.VM.get_all_records()
        for ref, vm in records.items():
            if vm["is_a_template"] or vm["is_control_domain"]:
                continue
            print(f"{vm['name_label']:30} {vm['power_state']:10} {ref}")

        # ── 4. Typed helpers over the same session ─────
        api = bind(client)
        hosts = await api.host.get_all()
        for host in hosts:
            print(f"host {await api.host.get_name_label(host)}: {await api.host.get_servertime(host)}")

        # ── 5. Asynchronous task ───────────────────────
        halted = [ref for ref, vm in records.items()
                  if vm["power_state"] == "Halted" and not vm["is_a_template"]]
        if halted:
            task = await client.Async.VM.start(halted[0], False, False)
            while await api.task.get_status(task) == "pending":
                await asyncio.sleep(1)
            print(f"task finished: {await api.task.get_status(task)}")
            try:
                await api.task.destroy(task)
            except GenericError as exc:
                print(f"could not destroy task: {exc}")


if __name__ == "__main__":
    asyncio.run(main())
