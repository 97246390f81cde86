"""Client configuration for pytpms."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Any

from pytpms._constants import DEFAULT_POLL_INTERVAL, DEFAULT_REQUEST_TIMEOUT, SUPPORTED_SCHEMES
from pytpms.exceptions import TpmsConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(env: Mapping[str, str], key: str) -> float | None:
    raw = env.get(key)
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise TpmsConfigError(f"{key} must be a number, got {raw!r}") from exc


@dataclasses.dataclass(frozen=True)
class TpmsConfig:
    """Client configuration.

    Parameters
    ----------
    address : str or None
        Default device address (hostname, IP literal or ``host:port``).
        Only used by callers that do not pass an address to ``connect``.
    poll_interval : float
        Seconds between two ``/data`` requests while connected.
    request_timeout : float
        Total timeout in seconds for a single HTTP request.
    discard_stale_responses : bool
        Drop a poll response when a later-issued poll has already been
        applied. Set to ``False`` to let the last arriving response win.
    scheme : str
        URL scheme used to reach the device. Devices speak plain ``http``.
    """

    address: str | None = None
    poll_interval: float = DEFAULT_POLL_INTERVAL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    discard_stale_responses: bool = True
    scheme: str = "http"

    def __post_init__(self) -> None:
        if self.poll_interval <= 0:
            raise TpmsConfigError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.request_timeout <= 0:
            raise TpmsConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if self.scheme not in SUPPORTED_SCHEMES:
            raise TpmsConfigError(f"scheme must be one of {sorted(SUPPORTED_SCHEMES)}, got {self.scheme!r}")

    @classmethod
    def from_env(cls, **overrides: Any) -> TpmsConfig:
        """Create configuration from ``TPMS_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        config_kwargs: dict[str, Any] = {}

        address = env.get("TPMS_ADDRESS")
        if address:
            config_kwargs["address"] = address

        scheme = env.get("TPMS_SCHEME")
        if scheme:
            config_kwargs["scheme"] = scheme.strip().lower()

        interval = _env_float(env, "TPMS_POLL_INTERVAL")
        if interval is not None:
            config_kwargs["poll_interval"] = interval

        timeout = _env_float(env, "TPMS_REQUEST_TIMEOUT")
        if timeout is not None:
            config_kwargs["request_timeout"] = timeout

        config_kwargs["discard_stale_responses"] = _env_bool(
            env.get("TPMS_DISCARD_STALE_RESPONSES"),
            True,
        )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
