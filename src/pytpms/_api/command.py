"""Command endpoint.

Endpoint:
  - POST /command
"""

from __future__ import annotations

import logging

from pytpms._constants import COMMAND_ENDPOINT, build_url
from pytpms._logfmt import truncate_for_log
from pytpms._transport import Transport
from pytpms.config import TpmsConfig
from pytpms.models.command import Command

_logger = logging.getLogger(__name__)


async def send_command(
    config: TpmsConfig,
    transport: Transport,
    address: str,
    command: Command,
) -> str:
    """POST *command* to the device and return its plain-text reply."""
    url = build_url(config.scheme, address, COMMAND_ENDPOINT)
    payload = command.to_payload()
    _logger.debug("Sending command %s to %s", payload, url)
    text = await transport.post_json(url, payload)
    _logger.debug("Command response: %s", truncate_for_log(text, max_string=200))
    return text
