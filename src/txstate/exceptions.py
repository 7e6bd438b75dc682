"""Exception hierarchy for txstate."""

from __future__ import annotations


class StateError(Exception):
    """Base exception for all txstate errors."""


class InternalError(StateError):
    """A state operation could not be completed.

    This is the only exception raised by :class:`txstate.state.State`. The
    message describes the underlying cause: the reply never arrived, the
    wait was interrupted, the stream reported a fault, or the reply could
    not be decoded. The original exception, if there was one, is kept on
    ``cause``.
    """

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__(message)


class StreamClosedError(StateError):
    """The stream was closed while a request was still outstanding."""
