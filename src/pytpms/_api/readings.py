"""Readings endpoint.

Endpoint:
  - GET /data
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pytpms._constants import DATA_ENDPOINT, READINGS_KEY, build_url
from pytpms._logfmt import truncate_for_log
from pytpms._transport import Transport
from pytpms.config import TpmsConfig
from pytpms.models.reading import ReadingSet

_logger = logging.getLogger(__name__)


def parse_readings(body: Any) -> ReadingSet | None:
    """Extract the :class:`ReadingSet` from a decoded ``/data`` body.

    Returns ``None`` ("no update") when the body carries no readings
    mapping, or when the mapping is malformed or incomplete.
    """
    if not isinstance(body, dict):
        _logger.debug("Readings body is not an object: %s", truncate_for_log(body, max_string=64))
        return None

    raw = body.get(READINGS_KEY)
    if raw is None:
        _logger.debug("Readings body has no %s field keys=%s", READINGS_KEY, list(body.keys()))
        return None

    try:
        return ReadingSet.model_validate(raw)
    except ValidationError as exc:
        _logger.warning(
            "Ignoring malformed %s payload (%d errors): %s",
            READINGS_KEY,
            exc.error_count(),
            truncate_for_log(raw, max_string=64),
        )
        return None


async def fetch_readings(
    config: TpmsConfig,
    transport: Transport,
    address: str,
) -> ReadingSet | None:
    """Fetch and parse the current readings of the device at *address*."""
    url = build_url(config.scheme, address, DATA_ENDPOINT)
    body = await transport.get_json(url)
    return parse_readings(body)
