"""Command line interface for pytpms.

Examples::

    pytpms watch 192.168.1.50 --count 5
    pytpms read 192.168.1.50 --json
    pytpms command 192.168.1.50 FR increase
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from pytpms.client import DeviceSession
from pytpms.config import TpmsConfig
from pytpms.exceptions import TpmsError, TpmsTransportError
from pytpms.models.command import Command, CommandAction
from pytpms.models.reading import ReadingSet, WheelId


def format_readings(readings: ReadingSet) -> str:
    """Render readings one wheel per line, two decimals each."""
    lines = [
        f"{wheel.value}  {reading.pressure:6.2f} PSI  {reading.temperature:6.2f} °C"
        for wheel, reading in readings.items()
    ]
    return "\n".join(lines)


def _render(readings: ReadingSet, json_mode: bool) -> str:
    if json_mode:
        return json.dumps(readings.to_payload(), separators=(",", ":"))
    return format_readings(readings)


def _build_parser(config: TpmsConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pytpms", description="Talk to a tire pressure sensor device")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="cmd", required=True)

    def _add_address(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "address",
            nargs="?",
            default=config.address,
            help="device address, e.g. 192.168.1.50 [env TPMS_ADDRESS]",
        )

    watch = sub.add_parser("watch", help="poll the device and print every update")
    _add_address(watch)
    watch.add_argument(
        "--interval",
        type=float,
        default=config.poll_interval,
        help="seconds between polls [env TPMS_POLL_INTERVAL]",
    )
    watch.add_argument("--count", type=int, default=0, help="stop after N updates (default: run until Ctrl-C)")
    watch.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")

    read = sub.add_parser("read", help="poll the device once")
    _add_address(read)
    read.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")

    command = sub.add_parser("command", help="send a pressure adjustment command")
    _add_address(command)
    command.add_argument("wheel", type=WheelId, choices=list(WheelId), help="wheel code")
    command.add_argument("action", type=CommandAction, choices=list(CommandAction), help="adjustment")

    return parser


async def _watch(session: DeviceSession, args: argparse.Namespace, updates: asyncio.Queue[ReadingSet]) -> int:
    session.connect(args.address)
    seen = 0
    try:
        while args.count <= 0 or seen < args.count:
            readings = await updates.get()
            seen += 1
            print(_render(readings, args.json_mode), flush=True)
            if not args.json_mode:
                print(flush=True)
    finally:
        session.disconnect()
    return 0


async def _read(session: DeviceSession, args: argparse.Namespace, errors: list[TpmsTransportError]) -> int:
    session.connect(args.address)
    try:
        readings = await session.poll()
    finally:
        session.disconnect()
    if readings is None:
        reason = str(errors[-1]) if errors else "device returned no readings"
        print(f"error: {reason}", file=sys.stderr)
        return 1
    print(_render(readings, args.json_mode))
    return 0


async def _command(session: DeviceSession, args: argparse.Namespace, errors: list[TpmsTransportError]) -> int:
    session.connect(args.address)
    try:
        task = session.dispatch(Command(wheel=args.wheel, action=args.action))
        text = await task if task is not None else None
    finally:
        session.disconnect()
    if text is None:
        reason = str(errors[-1]) if errors else "command was not sent"
        print(f"error: {reason}", file=sys.stderr)
        return 1
    print(text)
    return 0


async def _run(args: argparse.Namespace, config: TpmsConfig) -> int:
    updates: asyncio.Queue[ReadingSet] = asyncio.Queue()
    errors: list[TpmsTransportError] = []

    async with DeviceSession(config, on_readings=updates.put_nowait, on_error=errors.append) as session:
        if args.cmd == "watch":
            return await _watch(session, args, updates)
        if args.cmd == "read":
            return await _read(session, args, errors)
        return await _command(session, args, errors)


def main(argv: list[str] | None = None) -> int:
    """Run the pytpms command line interface."""
    try:
        env_cfg = TpmsConfig.from_env()
    except TpmsError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    parser = _build_parser(env_cfg)
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    if not args.address:
        parser.error("a device address is required (argument or TPMS_ADDRESS)")

    overrides: dict[str, Any] = {"address": args.address}
    if args.cmd == "watch":
        overrides["poll_interval"] = args.interval
    try:
        config = TpmsConfig.from_env(**overrides)
    except TpmsError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        return asyncio.run(_run(args, config))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
