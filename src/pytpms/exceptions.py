"""Custom exception hierarchy for pytpms."""

from __future__ import annotations


class TpmsError(Exception):
    """Base exception for all pytpms errors."""


class TpmsConfigError(TpmsError):
    """Invalid or missing configuration."""


class TpmsSessionError(TpmsError):
    """Session used outside of its ``async with`` lifecycle."""


class TpmsTransportError(TpmsError):
    """HTTP-level failure (network, timeout, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)
