"""Declarative triggers: handlers described in YAML instead of Python.

A trigger file looks like::

    name: gdk-pixbuf
    description: Refresh the gdk-pixbuf loader cache
    paths:
      - /usr/lib/gdk-pixbuf-2.0/2.10.0/loaders
    bins:
      - task: Updating gdk-pixbuf loaders
        bin: /usr/bin/gdk-pixbuf-query-loaders
        args: ["--update-cache"]

An argument of exactly ``***`` is replaced by the matched path; such a
trigger runs once per match instead of once per run.
"""

from __future__ import annotations

import shutil
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError, field_validator, model_validator

from systrigger.context import RunContext
from systrigger.errors import ConfigurationError, PatternError
from systrigger.handlers.base import Handler
from systrigger.logging import get_logger
from systrigger.resolver import check_pattern, expand
from systrigger.status import BREAK, SKIP, SUCCESS, HandlerStatus, failure

log = get_logger(__name__)

FAN_OUT = "***"
MAX_TASK_LENGTH = 42


def _check_patterns(patterns: list[str]) -> list[str]:
    for pattern in patterns:
        try:
            check_pattern(pattern)
        except PatternError as exc:
            raise ValueError(str(exc)) from exc
    return patterns


class Bin(BaseModel):
    """One command a trigger runs."""

    task: str
    bin: str
    args: list[str] = []

    @field_validator("task")
    @classmethod
    def _task_fits(cls, v: str) -> str:
        """Keep progress lines uniform in width."""
        if len(v) > MAX_TASK_LENGTH:
            raise ValueError(f"the task '{v}' cannot exceed {MAX_TASK_LENGTH} characters")
        return v

    def argv(self, path: Path) -> list[str]:
        return [self.bin, *(str(path) if arg == FAN_OUT else arg for arg in self.args)]


class SkipRules(BaseModel):
    """Conditions under which a trigger does nothing (unless forced)."""

    chroot: bool = False
    live: bool = False
    paths: list[str] = []

    @field_validator("paths")
    @classmethod
    def _valid_paths(cls, v: list[str]) -> list[str]:
        return _check_patterns(v)


class TriggerSpec(BaseModel):
    """A declarative trigger definition."""

    name: str
    description: str = ""
    paths: list[str]
    bins: list[Bin]
    env: dict[str, str] = {}
    skip: SkipRules | None = None
    remove: list[str] = []

    @field_validator("remove")
    @classmethod
    def _valid_remove(cls, v: list[str]) -> list[str]:
        return _check_patterns(v)

    @field_validator("bins")
    @classmethod
    def _has_bins(cls, v: list[Bin]) -> list[Bin]:
        if not v:
            raise ValueError("triggers must contain at least one bin")
        return v

    @model_validator(mode="after")
    def _remove_runs_once(self) -> TriggerSpec:
        if self.remove and self.fans_out:
            raise ValueError("'remove' cannot be combined with a '***' argument")
        return self

    @property
    def fans_out(self) -> bool:
        return any(FAN_OUT in b.args for b in self.bins)

    def should_skip(self, context: RunContext) -> bool:
        """Apply the skip rules against the run scope."""
        if context.force or self.skip is None:
            return False
        if self.skip.chroot and context.chroot:
            return True
        if self.skip.live and context.live:
            return True
        return any(expand(p, context.root) for p in self.skip.paths)


def _remove_paths(spec: TriggerSpec, context: RunContext) -> None:
    for pattern in spec.remove:
        for match in expand(pattern, context.root):
            target = Path(match)
            if not context.is_within_root(target):
                log.warning("remove_outside_root", handler=spec.name, path=str(target))
                continue
            if context.dry_run:
                log.info("dry_run_remove", handler=spec.name, path=str(target))
                continue
            log.debug("remove", handler=spec.name, path=str(target))
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            else:
                target.unlink()


def to_handler(spec: TriggerSpec) -> Handler:
    """Build a :class:`Handler` whose ``exec`` carries out *spec*."""

    def _exec(context: RunContext, path: Path) -> HandlerStatus:
        if spec.should_skip(context):
            return SKIP | BREAK

        if spec.remove:
            try:
                _remove_paths(spec, context)
            except OSError as exc:
                return failure(f"error removing path: {exc}")

        for b in spec.bins:
            log.info("trigger_task", handler=spec.name, task=b.task)
            result = context.commands.run(b.argv(path), env=spec.env or None)
            if not result.ok:
                return failure(f"{b.task}: {result.describe()}")

        if spec.fans_out:
            return SUCCESS
        return SUCCESS | BREAK

    return Handler(
        name=spec.name,
        paths=tuple(spec.paths),
        exec=_exec,
        description=spec.description,
    )


def load_trigger_file(path: Path | str) -> TriggerSpec:
    """Load and validate one trigger definition.

    Raises:
        ConfigurationError: If the file is unreadable, empty or invalid.
    """
    trigger_path = Path(path)
    try:
        data = yaml.safe_load(trigger_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Unable to read trigger file {trigger_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Trigger file must contain a YAML mapping: {trigger_path}")
    try:
        return TriggerSpec(**data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid trigger file {trigger_path}: {exc}") from exc


def load_trigger_dir(directory: Path | str) -> list[TriggerSpec]:
    """Load every ``*.yaml`` / ``*.yml`` trigger in *directory*, sorted by file name."""
    trigger_dir = Path(directory)
    if not trigger_dir.is_dir():
        return []
    files = sorted(p for p in trigger_dir.iterdir() if p.suffix in (".yaml", ".yml"))
    return [load_trigger_file(p) for p in files]
