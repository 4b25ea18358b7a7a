"""Shared test fixtures for systrigger."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from systrigger.commands import CommandResult
from systrigger.context import RunContext


@dataclass
class FakeRunner:
    """Command runner that records argv and returns canned exit codes.

    ``returncodes`` maps a binary's basename to its exit status; ``None``
    simulates a launch failure. Unlisted binaries exit 0.
    """

    returncodes: dict[str, int | None] = field(default_factory=dict)
    calls: list[list[str]] = field(default_factory=list)
    envs: list[Mapping[str, str] | None] = field(default_factory=list)

    def run(self, argv: Sequence[str], env: Mapping[str, str] | None = None) -> CommandResult:
        args = [str(a) for a in argv]
        self.calls.append(args)
        self.envs.append(env)
        code = self.returncodes.get(Path(args[0]).name, 0)
        if code is None:
            return CommandResult(argv=args, returncode=None, error="command not found")
        return CommandResult(argv=args, returncode=code)


@pytest.fixture()
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture()
def sysroot(tmp_path: Path) -> Path:
    """Create a minimal system tree with a few trigger directories."""
    root = tmp_path / "root"
    (root / "usr/lib/tmpfiles.d").mkdir(parents=True)
    (root / "usr/lib/tmpfiles.d/dbus.conf").write_text("d /run/dbus 0755 - - -\n", encoding="utf-8")
    (root / "usr/share/fonts/TTF").mkdir(parents=True)
    (root / "usr/share/icons/hicolor").mkdir(parents=True)
    (root / "usr/share/icons/hicolor/index.theme").write_text("[Icon Theme]\n", encoding="utf-8")
    (root / "usr/share/icons/Adwaita").mkdir(parents=True)
    (root / "usr/share/icons/Adwaita/index.theme").write_text("[Icon Theme]\n", encoding="utf-8")
    (root / "usr/share/icons/README").write_text("not a theme\n", encoding="utf-8")
    return root


@pytest.fixture()
def context(sysroot: Path, fake_runner: FakeRunner) -> RunContext:
    """Return a RunContext rooted at the temporary system tree."""
    return RunContext(root=sysroot, commands=fake_runner)
