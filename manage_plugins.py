#!/usr/bin/env python3
"""Plugin control-plane CLI - talks to a running service over HTTP."""

import argparse
import asyncio
import json
import os
import sys
from typing import Any, Optional, Tuple

import aiohttp
from rich.console import Console
from rich.table import Table

DEFAULT_URL = os.getenv(
    "CONFIG_API_URL",
    f"http://{os.getenv('CONFIG_API_HOST', '127.0.0.1')}:{os.getenv('CONFIG_API_PORT', '7070')}",
)

console = Console()


async def request(method: str, url: str, payload: Optional[dict] = None) -> Tuple[int, str]:
    """Send one request and return (status, body text)."""
    timeout = aiohttp.ClientTimeout(total=15)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        async with session.request(method, url, json=payload) as response:
            return response.status, await response.text()


def call(args, method: str, path: str, payload: Optional[dict] = None) -> Any:
    """Call the service; exit 1 on transport errors and non-2xx replies."""
    url = args.url.rstrip("/") + path
    try:
        status, body = asyncio.run(request(method, url, payload))
    except aiohttp.ClientError as e:
        console.print(f"[red]Request to {url} failed: {e}[/red]")
        sys.exit(1)

    if not 200 <= status < 300:
        console.print(f"[red]{method} {path} -> HTTP {status}[/red]")
        sys.exit(1)
    if not body:
        return None
    try:
        return json.loads(body)
    except json.JSONDecodeError:
        return body


def types_table(types: list) -> Table:
    table = Table(title="Plugin types")
    table.add_column("Name", style="cyan")
    table.add_column("Kind")
    table.add_column("Settings")
    table.add_column("Description")
    for info in types:
        settings = ", ".join(
            f"{name}*" if field.get("required") else name
            for name, field in (info.get("config") or {}).items()
        )
        table.add_row(info.get("name", ""), info.get("kind", ""), settings, info.get("description", ""))
    return table


def running_table(plugins: list) -> Table:
    table = Table(title="Running plugins")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Kind")
    table.add_column("Status")
    table.add_column("Created")
    for p in plugins:
        table.add_row(p.get("id", ""), p.get("name", ""), p.get("kind", ""), p.get("status", ""), p.get("created_at", ""))
    return table


def parse_settings(pairs: list) -> dict:
    """Turn KEY=VALUE arguments into a settings dict (values parsed as JSON when possible)."""
    settings = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"expected KEY=VALUE, got {pair!r}")
        try:
            settings[key] = json.loads(value)
        except json.JSONDecodeError:
            settings[key] = value
    return settings


def cmd_status(args):
    """Check that the service is alive."""
    print(call(args, "GET", "/status"))


def cmd_types(args):
    """List plugin types."""
    types = call(args, "GET", "/plugins/list") or []
    if not types:
        print("No plugin types found.")
        return
    console.print(types_table(types))


def cmd_running(args):
    """List running plugins."""
    plugins = call(args, "GET", "/plugins/running") or []
    if not plugins:
        print("No plugins running.")
        return
    console.print(running_table(plugins))


def cmd_create(args):
    """Create a plugin."""
    try:
        settings = parse_settings(args.set or [])
    except ValueError as e:
        print(str(e))
        sys.exit(1)
    reply = call(args, "POST", "/plugins/create", {"type": args.plugin_type, "config": settings})
    print(f"Plugin '{args.plugin_type}' created with id {reply['id']}")


def cmd_show(args):
    """Show a plugin's status."""
    reply = call(args, "GET", f"/plugins/{args.plugin_id}/status")
    print(f"{args.plugin_id}: {reply['status']}")


def cmd_delete(args):
    """Delete a plugin."""
    call(args, "DELETE", f"/plugins/{args.plugin_id}")
    print(f"Plugin {args.plugin_id} deleted.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Plugin control-plane client")
    parser.add_argument("--url", default=DEFAULT_URL, help=f"Service base URL (default: {DEFAULT_URL})")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("status", help="Check the service is alive")
    subparsers.add_parser("types", help="List plugin types")
    subparsers.add_parser("running", help="List running plugins")

    create_parser = subparsers.add_parser("create", help="Create a plugin")
    create_parser.add_argument("plugin_type", help="Plugin type, e.g. cpu")
    create_parser.add_argument("--set", action="append", metavar="KEY=VALUE", help="Plugin setting (repeatable)")

    show_parser = subparsers.add_parser("show", help="Show plugin status")
    show_parser.add_argument("plugin_id", help="Plugin ID")

    delete_parser = subparsers.add_parser("delete", help="Delete a plugin")
    delete_parser.add_argument("plugin_id", help="Plugin ID")

    return parser


def main():
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    commands = {
        "status": cmd_status,
        "types": cmd_types,
        "running": cmd_running,
        "create": cmd_create,
        "show": cmd_show,
        "delete": cmd_delete,
    }

    commands[args.command](args)


if __name__ == "__main__":
    main()
