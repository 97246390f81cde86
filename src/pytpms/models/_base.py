"""Base model for device payloads.

Every pytpms model inherits from :class:`TpmsBaseModel` which provides:

* frozen instances, so a snapshot handed to the presentation layer can
  never change underneath it.
* ``extra="ignore"`` so firmware that adds fields does not break parsing.
* A ``model_validator(mode="before")`` that strips sentinel strings
  (``""``, ``"--"``, NaN) some firmware builds emit for "no value", so
  the field's own validation decides what happens next.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

# Sentinel strings sent by the device for "not available".
_SENTINELS = frozenset({"", "--", "NaN", "nan"})


class TpmsBaseModel(BaseModel):
    """Base for device payload models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    @staticmethod
    def _clean_dict(values: dict[str, Any]) -> dict[str, Any]:
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and value.strip() in _SENTINELS:
                continue
            if isinstance(value, float) and math.isnan(value):
                continue
            cleaned[key] = value
        return cleaned

    @model_validator(mode="before")
    @classmethod
    def _clean_sentinels(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return TpmsBaseModel._clean_dict(values)
