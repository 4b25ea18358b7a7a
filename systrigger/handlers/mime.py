"""Handler: rebuild the shared MIME-info database."""

from __future__ import annotations

from pathlib import Path

from systrigger.context import RunContext
from systrigger.handlers.base import require_directory, run_once
from systrigger.status import HandlerStatus

NAME = "mime"
DESCRIPTION = "Update the shared MIME-info database"
PATHS = ("/usr/share/mime",)


def run(context: RunContext, path: Path) -> HandlerStatus:
    skip = require_directory(path)
    if skip is not None:
        return skip
    return run_once(context, ["/usr/bin/update-mime-database", str(path)], "Updating MIME database")
