"""Handler: refresh the dynamic linker cache when shared libraries change."""

from __future__ import annotations

from pathlib import Path

from systrigger.context import RunContext
from systrigger.handlers.base import run_once
from systrigger.status import SKIP, HandlerStatus

NAME = "ldconfig"
DESCRIPTION = "Update the dynamic linker run-time bindings"
PATHS = ("/usr/lib/*.so*", "/usr/lib64/*.so*")


def run(context: RunContext, path: Path) -> HandlerStatus:
    # Any library counts; -X leaves symlinks alone.
    if not path.is_file():
        return SKIP
    return run_once(
        context,
        ["/usr/sbin/ldconfig", "-X", "-r", str(context.root)],
        "Updating dynamic library cache",
    )
