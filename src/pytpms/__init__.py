"""pytpms - Async Python client for network-attached tire pressure sensors."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pytpms")
except PackageNotFoundError:
    __version__ = "0+local"
from pytpms.client import DeviceSession
from pytpms.config import TpmsConfig
from pytpms.exceptions import (
    TpmsConfigError,
    TpmsError,
    TpmsSessionError,
    TpmsTransportError,
)
from pytpms.models import (
    Command,
    CommandAction,
    Reading,
    ReadingSet,
    WheelId,
)
from pytpms.session import SessionState, SessionStatus

__all__ = [
    "__version__",
    "Command",
    "CommandAction",
    "DeviceSession",
    "Reading",
    "ReadingSet",
    "SessionState",
    "SessionStatus",
    "TpmsConfig",
    "TpmsConfigError",
    "TpmsError",
    "TpmsSessionError",
    "TpmsTransportError",
    "WheelId",
]
