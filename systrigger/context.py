"""Run-wide options shared by every handler invocation."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from systrigger.commands import CommandRunner, SubprocessRunner


@dataclass(frozen=True)
class RunContext:
    """Read-only snapshot of the options for one dispatch run.

    Handlers receive the same instance for every invocation and must not keep
    it beyond the call.
    """

    root: Path = Path("/")
    dry_run: bool = False
    force: bool = False
    chroot: bool = False
    live: bool = False
    commands: CommandRunner = field(default_factory=SubprocessRunner, compare=False)

    @property
    def rooted(self) -> bool:
        """True when operating on an alternative root rather than ``/``."""
        return self.root.resolve() != Path("/")

    def under_root(self, path: Path | str) -> Path:
        """Map an absolute system path onto the configured root."""
        p = Path(path)
        if not p.is_absolute():
            raise ValueError(f"Expected an absolute path, got '{p}'")
        return self.root / p.relative_to("/")

    def is_within_root(self, path: Path | str) -> bool:
        """Return True if *path* resolves to somewhere inside the root."""
        try:
            Path(path).resolve().relative_to(self.root.resolve())
        except ValueError:
            return False
        return True
