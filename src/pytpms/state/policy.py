"""Ordering policy for poll responses.

Ticks do not wait for the previous request, so a slow response can
arrive after a newer one. Each poll is tagged with a sequence number
when issued; this module decides whether its result may still be
applied.
"""

from __future__ import annotations


def should_accept_poll(
    *,
    applied_seq: int | None,
    incoming_seq: int,
    discard_stale: bool,
) -> bool:
    """Decide whether a poll result should replace the current readings.

    Policy:
    - Nothing applied yet: accept.
    - ``discard_stale`` off: accept (last arrival wins).
    - Otherwise: accept only results issued after the applied one.
    """
    if applied_seq is None or not discard_stale:
        return True
    return incoming_seq > applied_seq
