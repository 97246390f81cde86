"""Connection state snapshots exposed to callers."""

from __future__ import annotations

import enum
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from pytpms.models.reading import ReadingSet


class SessionStatus(enum.StrEnum):
    """Connected/disconnected toggle of a device session."""

    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


class SessionState(BaseModel):
    """Immutable snapshot of a :class:`~pytpms.client.DeviceSession`.

    Parameters
    ----------
    status : SessionStatus
        Whether the session is polling a device.
    address : str or None
        Device address while connected, ``None`` otherwise.
    readings : ReadingSet or None
        Latest applied readings while connected, ``None`` otherwise.
        Zero-valued until the first successful poll.
    last_poll_at : datetime or None
        UTC time the current readings were applied, ``None`` before the
        first successful poll. Lets a display flag stale data.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: SessionStatus = SessionStatus.DISCONNECTED
    address: str | None = None
    readings: ReadingSet | None = None
    last_poll_at: datetime | None = None

    @property
    def is_connected(self) -> bool:
        return self.status is SessionStatus.CONNECTED

    @classmethod
    def disconnected(cls) -> SessionState:
        return cls()
