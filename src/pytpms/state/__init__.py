"""Poll ordering policy."""

from pytpms.state.policy import should_accept_poll

__all__ = ["should_accept_poll"]
