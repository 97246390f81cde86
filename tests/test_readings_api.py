from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from pytpms._api.command import send_command
from pytpms._api.readings import fetch_readings, parse_readings
from pytpms._constants import build_url
from pytpms.config import TpmsConfig
from pytpms.models.command import Command, CommandAction
from pytpms.models.reading import WheelId

TIRE_DATA = {w.value: {"pressure": 30.0 + i, "temperature": 20.0 + i} for i, w in enumerate(WheelId)}


class RecordingTransport:
    def __init__(self, body: Any = None) -> None:
        self.body = body
        self.calls: list[tuple[str, str, Any]] = []

    async def get_json(self, url: str) -> Any:
        self.calls.append(("GET", url, None))
        return self.body

    async def post_json(self, url: str, payload: Mapping[str, Any]) -> str:
        self.calls.append(("POST", url, dict(payload)))
        return "ack"


def test_parse_readings_complete() -> None:
    readings = parse_readings({"tireData": TIRE_DATA, "uptime": 12})
    assert readings is not None
    assert readings[WheelId.REAR_RIGHT].pressure == 33.0


@pytest.mark.parametrize("body", [None, 42, "tireData", [], {}, {"tireData": "oops"}, {"tireData": {}}])
def test_parse_readings_no_update(body: Any) -> None:
    assert parse_readings(body) is None


def test_build_url_accepts_host_port_and_trailing_slash() -> None:
    assert build_url("http", "10.0.0.5", "/data") == "http://10.0.0.5/data"
    assert build_url("http", " esp32.local:8080/ ", "/command") == "http://esp32.local:8080/command"


@pytest.mark.asyncio
async def test_fetch_readings_uses_data_endpoint() -> None:
    transport = RecordingTransport({"tireData": TIRE_DATA})
    readings = await fetch_readings(TpmsConfig(), transport, "10.0.0.5")

    assert readings is not None
    assert transport.calls == [("GET", "http://10.0.0.5/data", None)]


@pytest.mark.asyncio
async def test_send_command_uses_command_endpoint() -> None:
    transport = RecordingTransport()
    cmd = Command(wheel=WheelId.FRONT_LEFT, action=CommandAction.DECREASE)

    reply = await send_command(TpmsConfig(), transport, "10.0.0.5", cmd)

    assert reply == "ack"
    assert transport.calls == [("POST", "http://10.0.0.5/command", {"wheel": "FL", "command": "DECREASE"})]
