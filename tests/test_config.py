from __future__ import annotations

import pytest

from pytpms.config import TpmsConfig
from pytpms.exceptions import TpmsConfigError


def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "TPMS_ADDRESS",
        "TPMS_POLL_INTERVAL",
        "TPMS_REQUEST_TIMEOUT",
        "TPMS_DISCARD_STALE_RESPONSES",
        "TPMS_SCHEME",
    ):
        monkeypatch.delenv(key, raising=False)


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    config = TpmsConfig.from_env()
    assert config == TpmsConfig()
    assert config.poll_interval == 1.0
    assert config.scheme == "http"
    assert config.discard_stale_responses is True


def test_from_env_reads_tpms_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("TPMS_ADDRESS", "192.168.4.1")
    monkeypatch.setenv("TPMS_POLL_INTERVAL", "0.5")
    monkeypatch.setenv("TPMS_REQUEST_TIMEOUT", "2")
    monkeypatch.setenv("TPMS_DISCARD_STALE_RESPONSES", "off")

    config = TpmsConfig.from_env()

    assert config.address == "192.168.4.1"
    assert config.poll_interval == 0.5
    assert config.request_timeout == 2.0
    assert config.discard_stale_responses is False


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("TPMS_ADDRESS", "192.168.4.1")
    monkeypatch.setenv("TPMS_POLL_INTERVAL", "5")

    config = TpmsConfig.from_env(address="10.0.0.5", poll_interval=0.25)

    assert config.address == "10.0.0.5"
    assert config.poll_interval == 0.25


def test_unparseable_bool_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("TPMS_DISCARD_STALE_RESPONSES", "maybe")
    assert TpmsConfig.from_env().discard_stale_responses is True


def test_non_numeric_interval_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("TPMS_POLL_INTERVAL", "fast")
    with pytest.raises(TpmsConfigError):
        TpmsConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"poll_interval": 0},
        {"poll_interval": -1.0},
        {"request_timeout": 0},
        {"scheme": "ftp"},
    ],
)
def test_invalid_values_rejected(kwargs: dict[str, object]) -> None:
    with pytest.raises(TpmsConfigError):
        TpmsConfig(**kwargs)  # type: ignore[arg-type]
