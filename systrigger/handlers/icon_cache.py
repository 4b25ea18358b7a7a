"""Handler: refresh GTK icon caches, one per icon theme directory."""

from __future__ import annotations

from pathlib import Path

from systrigger.context import RunContext
from systrigger.handlers.base import require_directory
from systrigger.status import SKIP, SUCCESS, HandlerStatus, failure

NAME = "icon-cache"
DESCRIPTION = "Update the icon cache of every icon theme"
PATHS = ("/usr/share/icons/*",)


def run(context: RunContext, path: Path) -> HandlerStatus:
    """Rebuild the cache for a single theme.

    Each theme has its own cache, so this handler never stops early. Themes
    without an ``index.theme`` are skipped: the tool refuses them anyway.
    """
    skip = require_directory(path)
    if skip is not None:
        return skip
    if not (path / "index.theme").is_file():
        return SKIP

    result = context.commands.run(["/usr/bin/gtk-update-icon-cache", "-ftq", str(path)])
    if not result.ok:
        return failure(f"Updating icon cache for {path.name}: {result.describe()}", stop=False)
    return SUCCESS
