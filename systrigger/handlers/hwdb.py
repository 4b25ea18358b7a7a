"""Handler: rebuild the udev hardware database."""

from __future__ import annotations

from pathlib import Path

from systrigger.context import RunContext
from systrigger.handlers.base import require_directory, run_once
from systrigger.status import HandlerStatus

NAME = "hwdb"
DESCRIPTION = "Compile the udev hardware database"
PATHS = ("/usr/lib/udev/hwdb.d", "/etc/udev/hwdb.d")


def run(context: RunContext, path: Path) -> HandlerStatus:
    skip = require_directory(path)
    if skip is not None:
        return skip
    return run_once(
        context,
        ["/usr/bin/systemd-hwdb", f"--root={context.root}", "update"],
        "Updating hwdb",
    )
