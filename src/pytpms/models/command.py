"""Adjustment commands sent to the device."""

from __future__ import annotations

import enum
from typing import Any

from pydantic import Field

from pytpms.models._base import TpmsBaseModel
from pytpms.models.reading import WheelId


class CommandAction(enum.StrEnum):
    """``command`` values accepted by the ``/command`` endpoint."""

    INCREASE = "INCREASE"
    DECREASE = "DECREASE"

    @classmethod
    def _missing_(cls, value: object) -> CommandAction | None:
        if isinstance(value, str):
            upper = value.strip().upper()
            for member in cls:
                if member.value == upper:
                    return member
        return None


class Command(TpmsBaseModel):
    """A single pressure adjustment for one wheel.

    Serialises to ``{"wheel": "FR", "command": "INCREASE"}``.
    """

    wheel: WheelId
    action: CommandAction = Field(alias="command")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
