"""Handler: rebuild the desktop entry MIME cache."""

from __future__ import annotations

from pathlib import Path

from systrigger.context import RunContext
from systrigger.handlers.base import require_directory, run_once
from systrigger.status import HandlerStatus

NAME = "desktop-files"
DESCRIPTION = "Update the cache of MIME types handled by desktop files"
PATHS = ("/usr/share/applications",)


def run(context: RunContext, path: Path) -> HandlerStatus:
    skip = require_directory(path)
    if skip is not None:
        return skip
    return run_once(
        context,
        ["/usr/bin/update-desktop-database", "-q", str(path)],
        "Updating desktop database",
    )
