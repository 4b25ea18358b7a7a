"""Handler status protocol.

A handler reports one of three outcomes per matched path (success, skip or
fail) together with an independent ``stop`` modifier that ends iteration over
the remaining matches of that handler::

    return SUCCESS | BREAK
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class Outcome(str, Enum):
    """What happened for one matched path."""

    SUCCESS = "success"
    SKIP = "skip"
    FAIL = "fail"


class _Break:
    """Marker for the ``BREAK`` modifier; only meaningful combined with a status."""

    def __repr__(self) -> str:
        return "BREAK"


BREAK = _Break()


@dataclass(frozen=True)
class HandlerStatus:
    """Result of a single ``exec(context, path)`` invocation."""

    outcome: Outcome
    stop: bool = False
    detail: str = ""

    def __or__(self, other: object) -> HandlerStatus:
        if other is BREAK:
            return replace(self, stop=True)
        return NotImplemented

    __ror__ = __or__

    @property
    def succeeded(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    @property
    def skipped(self) -> bool:
        return self.outcome is Outcome.SKIP

    @property
    def failed(self) -> bool:
        return self.outcome is Outcome.FAIL

    def label(self) -> str:
        """Human-readable form, e.g. ``fail|break``."""
        return f"{self.outcome.value}|break" if self.stop else self.outcome.value


SUCCESS = HandlerStatus(Outcome.SUCCESS)
SKIP = HandlerStatus(Outcome.SKIP)
FAIL = HandlerStatus(Outcome.FAIL)


def failure(detail: str, stop: bool = True) -> HandlerStatus:
    """Build a ``FAIL`` status carrying a diagnostic message."""
    return HandlerStatus(Outcome.FAIL, stop=stop, detail=detail)
