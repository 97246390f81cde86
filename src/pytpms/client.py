"""High-level async session for a tire pressure sensor device."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from datetime import UTC, datetime
from typing import Any, TypeVar

import aiohttp

from pytpms._api.command import send_command
from pytpms._api.readings import fetch_readings
from pytpms._transport import HttpTransport, Transport
from pytpms.config import TpmsConfig
from pytpms.exceptions import TpmsSessionError, TpmsTransportError
from pytpms.models.command import Command
from pytpms.models.reading import ReadingSet
from pytpms.session import SessionState, SessionStatus
from pytpms.state.policy import should_accept_poll

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class DeviceSession:
    """Polling session against one device address.

    Usage::

        async with DeviceSession(config) as session:
            session.connect("192.168.1.50")
            ...
            session.dispatch(Command(wheel=WheelId.FRONT_RIGHT, action=CommandAction.INCREASE))
            ...
            session.disconnect()

    ``connect``, ``dispatch`` and ``disconnect`` never block: polling and
    commands run as tasks on the running event loop. Transport failures
    are logged, reported to ``on_error`` and swallowed; the only way a
    caller notices them is that the readings stop changing.
    """

    def __init__(
        self,
        config: TpmsConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        on_readings: Callable[[ReadingSet], None] | None = None,
        on_error: Callable[[TpmsTransportError], None] | None = None,
    ) -> None:
        self._config = config or TpmsConfig()
        self._external_session = session is not None
        self._http_session = session
        self._external_transport = transport is not None
        self._transport = transport
        self._on_readings = on_readings
        self._on_error = on_error

        self._address: str | None = None
        self._readings: ReadingSet | None = None
        self._last_poll_at: datetime | None = None
        self._poll_task: asyncio.Task[None] | None = None
        self._polls: set[asyncio.Task[Any]] = set()
        self._commands: set[asyncio.Task[Any]] = set()
        # Bumped on every disconnect; results from an older epoch are dropped.
        self._epoch = 0
        self._issued_seq = 0
        self._applied_seq: int | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> DeviceSession:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Disconnect, cancel pending commands and release the HTTP session."""
        self.disconnect()
        for task in list(self._commands):
            task.cancel()
        self._commands.clear()
        if not self._external_transport:
            self._transport = None
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def config(self) -> TpmsConfig:
        return self._config

    @property
    def is_connected(self) -> bool:
        return self._address is not None

    @property
    def address(self) -> str | None:
        return self._address

    @property
    def readings(self) -> ReadingSet | None:
        """Latest applied readings, ``None`` while disconnected."""
        return self._readings

    @property
    def state(self) -> SessionState:
        if self._address is None:
            return SessionState.disconnected()
        return SessionState(
            status=SessionStatus.CONNECTED,
            address=self._address,
            readings=self._readings,
            last_poll_at=self._last_poll_at,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def connect(self, address: str | None = None) -> SessionState:
        """Start polling the device at *address*.

        Falls back to ``config.address`` when *address* is ``None``. An
        empty address is a no-op. Connecting while already connected
        replaces the previous session. Must be called from within the
        running event loop.
        """
        if address is None:
            address = self._config.address or ""
        address = address.strip()
        if not address:
            _logger.debug("connect() called without an address; ignoring")
            return self.state

        self._require_transport()
        loop = asyncio.get_running_loop()

        if self._address is not None:
            _logger.debug("Replacing session to %s with %s", self._address, address)
            self.disconnect()

        self._address = address
        self._readings = ReadingSet.zero()
        self._last_poll_at = None
        self._applied_seq = None
        self._poll_task = loop.create_task(
            self._poll_loop(self._epoch),
            name=f"pytpms-poll-{address}",
        )
        _logger.info("Connected to device %s (polling every %ss)", address, self._config.poll_interval)
        return self.state

    def disconnect(self) -> None:
        """Stop polling and forget the readings. Safe to call repeatedly.

        When this returns no further poll will run or be applied.
        Commands already dispatched are left to complete.
        """
        self._epoch += 1
        task = self._poll_task
        self._poll_task = None
        if task is not None and not task.done():
            task.cancel()
        for poll in list(self._polls):
            poll.cancel()
        self._polls.clear()

        if self._address is not None:
            _logger.info("Disconnected from device %s", self._address)
        self._address = None
        self._readings = None
        self._last_poll_at = None
        self._applied_seq = None

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    async def _poll_loop(self, epoch: int) -> None:
        interval = self._config.poll_interval
        while True:
            await asyncio.sleep(interval)
            if epoch != self._epoch:
                return
            # Each tick is independent: a slow request does not delay the next one.
            self._spawn(self.poll(), self._polls)

    async def poll(self) -> ReadingSet | None:
        """Fetch ``/data`` once and apply the result.

        Runs once per tick while connected; may also be awaited directly.
        Returns the readings applied by this call, or ``None`` when there
        was nothing to apply. Never raises transport errors.
        """
        address = self._address
        transport = self._transport
        if address is None or transport is None:
            return None

        epoch = self._epoch
        self._issued_seq += 1
        seq = self._issued_seq

        try:
            readings = await fetch_readings(self._config, transport, address)
        except TpmsTransportError as exc:
            if epoch != self._epoch:
                _logger.debug("Poll of %s failed after disconnect: %s", address, exc)
                return None
            _logger.warning("Error fetching data from %s: %s", address, exc)
            self._notify_error(exc)
            return None

        if epoch != self._epoch:
            _logger.debug("Dropping poll result for %s received after disconnect", address)
            return None
        if readings is None:
            return None
        return self._apply_readings(readings, seq)

    def _apply_readings(self, readings: ReadingSet, seq: int) -> ReadingSet | None:
        """Single writer of ``_readings``."""
        if not should_accept_poll(
            applied_seq=self._applied_seq,
            incoming_seq=seq,
            discard_stale=self._config.discard_stale_responses,
        ):
            _logger.debug("Discarding stale poll response seq=%d applied=%s", seq, self._applied_seq)
            return None

        self._applied_seq = seq
        self._readings = readings
        self._last_poll_at = datetime.now(UTC)
        if self._on_readings is not None:
            try:
                self._on_readings(readings)
            except Exception:
                _logger.debug("on_readings callback failed", exc_info=True)
        return readings

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def dispatch(self, command: Command) -> asyncio.Task[str | None] | None:
        """Send *command* to the connected device in the background.

        Returns ``None`` without touching the network while disconnected.
        Otherwise returns the task carrying the request; awaiting it
        yields the device's reply text, or ``None`` if the request
        failed.
        """
        if self._address is None:
            _logger.debug("dispatch(%s) while disconnected; ignoring", command.to_payload())
            return None
        return self._spawn(self._send(self._address, command), self._commands)

    async def _send(self, address: str, command: Command) -> str | None:
        transport = self._transport
        if transport is None:
            return None
        try:
            text = await send_command(self._config, transport, address, command)
        except TpmsTransportError as exc:
            _logger.warning("Error sending command to %s: %s", address, exc)
            self._notify_error(exc)
            return None
        _logger.info("Command response from %s: %s", address, text)
        return text

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise TpmsSessionError("Session not initialized. Use 'async with DeviceSession(...) as session:'")
        return self._transport

    def _spawn(self, coro: Coroutine[Any, Any, T], bucket: set[asyncio.Task[Any]]) -> asyncio.Task[T]:
        task = asyncio.get_running_loop().create_task(coro)
        bucket.add(task)
        task.add_done_callback(bucket.discard)
        return task

    def _notify_error(self, exc: TpmsTransportError) -> None:
        if self._on_error is None:
            return
        try:
            self._on_error(exc)
        except Exception:
            _logger.debug("on_error callback failed", exc_info=True)
