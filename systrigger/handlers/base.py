"""Handler interface definition.

Every built-in handler is a module that exposes ``NAME``, ``DESCRIPTION``,
``PATHS`` and a ``run`` function with the following signature::

    def run(context: RunContext, path: Path) -> HandlerStatus:
        '''Refresh whatever *path* implies.

        Args:
            context: The read-only run context (root, dry-run, command runner).
            path: One existing path that matched an entry of ``PATHS``.

        Returns:
            SUCCESS, SKIP or FAIL, optionally combined with BREAK.
        '''
        ...

To add a new built-in handler:

1. Create a module in ``systrigger/handlers/`` with the attributes above.
2. Add it to ``BUILTIN_HANDLERS`` in ``systrigger/registry.py``; its position
   in that tuple is its execution order.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from systrigger.context import RunContext
from systrigger.logging import get_logger
from systrigger.status import BREAK, SKIP, SUCCESS, HandlerStatus, failure

log = get_logger(__name__)


class HandlerProtocol(Protocol):
    """Structural type that every handler ``exec`` function must satisfy."""

    def __call__(self, context: RunContext, path: Path) -> HandlerStatus: ...


@dataclass(frozen=True)
class Handler:
    """A named unit of work bound to an interest set."""

    name: str
    paths: tuple[str, ...]
    exec: HandlerProtocol
    description: str = ""


def run_once(context: RunContext, argv: Sequence[str], what: str) -> HandlerStatus:
    """Run *argv* and stop the handler afterwards, whatever the outcome.

    Used by handlers that only need to fire once however many of their
    globs matched.
    """
    result = context.commands.run(argv)
    if not result.ok:
        return failure(f"{what}: {result.describe()}")
    return SUCCESS | BREAK


def require_directory(path: Path) -> HandlerStatus | None:
    """Return SKIP unless *path* is a directory, else ``None``."""
    if not path.is_dir():
        log.debug("not_a_directory", path=str(path))
        return SKIP
    return None
