"""Handler: rebuild fontconfig caches."""

from __future__ import annotations

from pathlib import Path

from systrigger.context import RunContext
from systrigger.handlers.base import require_directory, run_once
from systrigger.status import HandlerStatus

NAME = "fonts"
DESCRIPTION = "Rebuild the fontconfig cache"
PATHS = ("/usr/share/fonts",)


def run(context: RunContext, path: Path) -> HandlerStatus:
    skip = require_directory(path)
    if skip is not None:
        return skip
    argv = ["/usr/bin/fc-cache", "-f"]
    if context.rooted:
        argv.append(f"--sysroot={context.root}")
    return run_once(context, argv, "Rebuilding font cache")
