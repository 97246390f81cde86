"""Per-wheel pressure/temperature readings."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from typing import Annotated, Any

from pydantic import Field

from pytpms.models._base import TpmsBaseModel


class WheelId(enum.StrEnum):
    """Wheel mounting position, valued by its wire code."""

    FRONT_LEFT = "FL"
    FRONT_RIGHT = "FR"
    REAR_LEFT = "RL"
    REAR_RIGHT = "RR"

    @classmethod
    def _missing_(cls, value: object) -> WheelId | None:
        # Accept lower-case codes ("fr") as typed on a command line.
        if isinstance(value, str):
            upper = value.strip().upper()
            for member in cls:
                if member.value == upper:
                    return member
        return None


# JSON numbers only: no bools, numeric strings or non-finite values.
SensorValue = Annotated[float, Field(strict=True, allow_inf_nan=False)]


class Reading(TpmsBaseModel):
    """Pressure/temperature pair reported for one wheel.

    Pressure is reported in PSI and temperature in degrees Celsius.
    """

    pressure: SensorValue
    temperature: SensorValue

    @classmethod
    def zero(cls) -> Reading:
        return cls(pressure=0.0, temperature=0.0)


_FIELD_BY_WHEEL: dict[WheelId, str] = {
    WheelId.FRONT_LEFT: "front_left",
    WheelId.FRONT_RIGHT: "front_right",
    WheelId.REAR_LEFT: "rear_left",
    WheelId.REAR_RIGHT: "rear_right",
}


class ReadingSet(TpmsBaseModel):
    """Readings for all four wheels.

    The set of wheels is fixed: a payload missing any wheel fails
    validation instead of producing a partial set. Instances are only
    ever replaced as a whole.
    """

    front_left: Reading = Field(alias="FL")
    front_right: Reading = Field(alias="FR")
    rear_left: Reading = Field(alias="RL")
    rear_right: Reading = Field(alias="RR")

    @classmethod
    def zero(cls) -> ReadingSet:
        """Return the zero-valued set a session starts with."""
        return cls(
            front_left=Reading.zero(),
            front_right=Reading.zero(),
            rear_left=Reading.zero(),
            rear_right=Reading.zero(),
        )

    def __getitem__(self, wheel: WheelId | str) -> Reading:
        reading: Reading = getattr(self, _FIELD_BY_WHEEL[WheelId(wheel)])
        return reading

    def items(self) -> Iterator[tuple[WheelId, Reading]]:
        """Yield ``(wheel, reading)`` pairs in FL, FR, RL, RR order."""
        for wheel in WheelId:
            yield wheel, self[wheel]

    def to_payload(self) -> dict[str, Any]:
        """Return the wire representation keyed by wheel code."""
        return self.model_dump(by_alias=True)
