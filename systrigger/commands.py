"""External command execution.

Handlers never spawn processes directly; they go through the
:class:`CommandRunner` carried by the run context so tests can swap in a fake
and ``--dry-run`` can swap in :class:`DryRunRunner`.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from systrigger.logging import get_logger

log = get_logger(__name__)


@dataclass
class CommandResult:
    """Outcome of one external command.

    ``returncode`` is ``None`` when the process could not be launched (or was
    killed after a timeout); ``error`` then explains why.
    """

    argv: list[str]
    returncode: int | None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def describe(self) -> str:
        """One-line diagnostic suitable for a failure record."""
        if self.returncode is None:
            return f"{self.argv[0]}: {self.error}"
        return f"{self.argv[0]} exited with status {self.returncode}"


class CommandRunner(Protocol):
    """Structural type for anything that can run an argument vector."""

    def run(self, argv: Sequence[str], env: Mapping[str, str] | None = None) -> CommandResult: ...


class SubprocessRunner:
    """Run commands with :func:`subprocess.run`, never through a shell."""

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    def run(self, argv: Sequence[str], env: Mapping[str, str] | None = None) -> CommandResult:
        args = [str(a) for a in argv]
        merged_env = None
        if env:
            merged_env = dict(os.environ)
            merged_env.update(env)

        log.debug("command_start", argv=args)
        try:
            proc = subprocess.run(args, env=merged_env, check=False, timeout=self.timeout)
        except FileNotFoundError:
            return CommandResult(argv=args, returncode=None, error="command not found")
        except PermissionError:
            return CommandResult(argv=args, returncode=None, error="permission denied")
        except subprocess.TimeoutExpired:
            return CommandResult(
                argv=args,
                returncode=None,
                error=f"timed out after {self.timeout}s and was killed",
            )
        except OSError as exc:
            return CommandResult(argv=args, returncode=None, error=str(exc))

        log.debug("command_done", argv=args, returncode=proc.returncode)
        return CommandResult(argv=args, returncode=proc.returncode)


@dataclass
class DryRunRunner:
    """Record commands instead of running them; every command "succeeds"."""

    calls: list[list[str]] = field(default_factory=list)

    def run(self, argv: Sequence[str], env: Mapping[str, str] | None = None) -> CommandResult:
        args = [str(a) for a in argv]
        self.calls.append(args)
        log.info("dry_run_command", argv=" ".join(args))
        return CommandResult(argv=args, returncode=0)
