"""Tests for Pydantic model parsing of device payloads."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pytpms.models.command import Command, CommandAction
from pytpms.models.reading import Reading, ReadingSet, WheelId
from pytpms.session import SessionState, SessionStatus

TIRE_DATA = {
    "FL": {"pressure": 32.1, "temperature": 25.0},
    "FR": {"pressure": 31.8, "temperature": 24.8},
    "RL": {"pressure": 32.0, "temperature": 25.1},
    "RR": {"pressure": 31.9, "temperature": 24.9},
}


class TestWheelId:
    def test_wire_codes(self) -> None:
        assert [w.value for w in WheelId] == ["FL", "FR", "RL", "RR"]

    def test_lower_case_code_accepted(self) -> None:
        assert WheelId("rr") is WheelId.REAR_RIGHT

    def test_unknown_code_rejected(self) -> None:
        with pytest.raises(ValueError):
            WheelId("XX")


class TestReadingSet:
    def test_parse_by_wire_code(self) -> None:
        readings = ReadingSet.model_validate(TIRE_DATA)
        assert readings[WheelId.FRONT_LEFT] == Reading(pressure=32.1, temperature=25.0)
        assert readings["fr"].pressure == 31.8
        assert readings.rear_right.temperature == 24.9

    def test_items_in_fixed_order(self) -> None:
        readings = ReadingSet.model_validate(TIRE_DATA)
        assert [w for w, _ in readings.items()] == list(WheelId)

    def test_to_payload_matches_wire_shape(self) -> None:
        assert ReadingSet.model_validate(TIRE_DATA).to_payload() == TIRE_DATA

    def test_zero(self) -> None:
        zero = ReadingSet.zero()
        assert all(r == Reading(pressure=0.0, temperature=0.0) for _, r in zero.items())

    def test_missing_wheel_rejected(self) -> None:
        partial = {k: v for k, v in TIRE_DATA.items() if k != "RL"}
        with pytest.raises(ValidationError):
            ReadingSet.model_validate(partial)

    def test_json_integers_accepted(self) -> None:
        data = dict(TIRE_DATA, FL={"pressure": 30, "temperature": 21})
        assert ReadingSet.model_validate(data)[WheelId.FRONT_LEFT] == Reading(pressure=30.0, temperature=21.0)

    @pytest.mark.parametrize(
        "value",
        [True, "30.5", float("inf"), float("-inf"), 1e999],
    )
    def test_non_numeric_or_non_finite_value_rejected(self, value: object) -> None:
        with pytest.raises(ValidationError):
            Reading.model_validate({"pressure": value, "temperature": 20.0})

    def test_sentinel_value_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Reading.model_validate({"pressure": "--", "temperature": 20.0})

    def test_extra_fields_ignored(self) -> None:
        data = dict(TIRE_DATA, FL={"pressure": 1.0, "temperature": 2.0, "battery": 3.1})
        assert ReadingSet.model_validate(data)[WheelId.FRONT_LEFT] == Reading(pressure=1.0, temperature=2.0)

    def test_frozen(self) -> None:
        readings = ReadingSet.zero()
        with pytest.raises(ValidationError):
            readings.front_left = Reading(pressure=1.0, temperature=1.0)  # type: ignore[misc]


class TestCommand:
    def test_payload(self) -> None:
        cmd = Command(wheel=WheelId.FRONT_RIGHT, action=CommandAction.INCREASE)
        assert cmd.to_payload() == {"wheel": "FR", "command": "INCREASE"}

    def test_parse_wire_shape(self) -> None:
        cmd = Command.model_validate({"wheel": "RL", "command": "DECREASE"})
        assert cmd.wheel is WheelId.REAR_LEFT
        assert cmd.action is CommandAction.DECREASE

    def test_case_insensitive_action(self) -> None:
        assert CommandAction("increase") is CommandAction.INCREASE

    def test_unknown_action_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Command.model_validate({"wheel": "FL", "command": "DEFLATE"})


class TestSessionState:
    def test_disconnected_default(self) -> None:
        state = SessionState.disconnected()
        assert state.status is SessionStatus.DISCONNECTED
        assert not state.is_connected
        assert state.address is None
        assert state.readings is None
