"""Handler: create system users declared in sysusers.d."""

from __future__ import annotations

from pathlib import Path

from systrigger.context import RunContext
from systrigger.handlers.base import require_directory, run_once
from systrigger.status import HandlerStatus

NAME = "sysusers"
DESCRIPTION = "Create system users and groups from sysusers.d"
PATHS = ("/usr/lib/sysusers.d",)


def run(context: RunContext, path: Path) -> HandlerStatus:
    skip = require_directory(path)
    if skip is not None:
        return skip
    return run_once(
        context,
        ["/usr/bin/systemd-sysusers", f"--root={context.root}"],
        "Updating system users",
    )
