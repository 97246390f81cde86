"""Typed models for device payloads."""

from pytpms.models._base import TpmsBaseModel
from pytpms.models.command import Command, CommandAction
from pytpms.models.reading import Reading, ReadingSet, WheelId

__all__ = [
    "Command",
    "CommandAction",
    "Reading",
    "ReadingSet",
    "TpmsBaseModel",
    "WheelId",
]
