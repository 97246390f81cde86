"""HTTP transport for talking to the device's embedded web server."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pytpms._constants import USER_AGENT
from pytpms._logfmt import truncate_for_log
from pytpms.config import TpmsConfig
from pytpms.exceptions import TpmsTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, url: str) -> Any:
        ...

    async def post_json(self, url: str, payload: Mapping[str, Any]) -> str:
        ...


class HttpTransport:
    """Plain HTTP/JSON transport over a shared :class:`aiohttp.ClientSession`."""

    def __init__(self, config: TpmsConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def _request(self, method: str, url: str, **kwargs: Any) -> str:
        headers: dict[str, str] = {"user-agent": USER_AGENT}
        headers.update(kwargs.pop("headers", {}))

        _logger.debug("%s %s", method, url)

        try:
            async with self._http.request(method, url, headers=headers, timeout=self._timeout, **kwargs) as resp:
                text = await resp.text()
                if not 200 <= resp.status < 300:
                    raise TpmsTransportError(
                        f"HTTP {resp.status} from {url}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=url,
                    )
        except TpmsTransportError:
            raise
        except UnicodeDecodeError as exc:
            raise TpmsTransportError(
                f"Undecodable body from {url}: {exc.reason} at byte {exc.start}",
                endpoint=url,
            ) from exc
        except TimeoutError as exc:
            raise TpmsTransportError(
                f"Request to {url} timed out after {self._config.request_timeout}s",
                endpoint=url,
            ) from exc
        except aiohttp.ClientError as exc:
            raise TpmsTransportError(
                f"Request to {url} failed: {exc}",
                endpoint=url,
            ) from exc

        _logger.debug("%s %s -> %s", method, url, truncate_for_log(text, max_string=200))
        return text

    async def get_json(self, url: str) -> Any:
        """GET *url* and decode the body as JSON."""
        text = await self._request("GET", url, headers={"accept": "application/json"})
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise TpmsTransportError(
                f"Invalid JSON from {url}: {text[:200]}",
                endpoint=url,
            ) from exc

    async def post_json(self, url: str, payload: Mapping[str, Any]) -> str:
        """POST *payload* as a JSON body and return the response text."""
        body = json.dumps(dict(payload), separators=(",", ":"))
        return await self._request(
            "POST",
            url,
            data=body,
            headers={"content-type": "application/json"},
        )
