from __future__ import annotations

from pytpms.state.policy import should_accept_poll


def test_first_result_always_accepted() -> None:
    assert should_accept_poll(applied_seq=None, incoming_seq=7, discard_stale=True)


def test_newer_result_accepted() -> None:
    assert should_accept_poll(applied_seq=3, incoming_seq=4, discard_stale=True)


def test_older_result_rejected_when_discarding_stale() -> None:
    assert not should_accept_poll(applied_seq=5, incoming_seq=4, discard_stale=True)


def test_older_result_accepted_when_last_arrival_wins() -> None:
    assert should_accept_poll(applied_seq=5, incoming_seq=4, discard_stale=False)
