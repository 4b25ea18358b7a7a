"""Handler: create systemd tmpfiles when tmpfiles.d rules change."""

from __future__ import annotations

from pathlib import Path

from systrigger.context import RunContext
from systrigger.handlers.base import require_directory, run_once
from systrigger.status import HandlerStatus

NAME = "tmpfiles"
DESCRIPTION = "Create files and directories declared in tmpfiles.d"
PATHS = ("/usr/lib/tmpfiles.d",)


def run(context: RunContext, path: Path) -> HandlerStatus:
    """Tell systemd-tmpfiles to apply the updated rules.

    Pinning ``--root`` keeps the tool from touching the running system's
    dbus state when operating on an image.
    """
    skip = require_directory(path)
    if skip is not None:
        return skip
    argv = ["/usr/bin/systemd-tmpfiles", f"--root={context.root}", "--create"]
    return run_once(context, argv, "Updating tmpfiles")
