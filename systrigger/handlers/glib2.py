"""Handler: compile GSettings schemas."""

from __future__ import annotations

from pathlib import Path

from systrigger.context import RunContext
from systrigger.handlers.base import require_directory, run_once
from systrigger.status import HandlerStatus

NAME = "glib2"
DESCRIPTION = "Compile GSettings XML schema files"
PATHS = ("/usr/share/glib-2.0/schemas",)


def run(context: RunContext, path: Path) -> HandlerStatus:
    skip = require_directory(path)
    if skip is not None:
        return skip
    return run_once(context, ["/usr/bin/glib-compile-schemas", str(path)], "Compiling glib2 schemas")
