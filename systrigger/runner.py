"""Dispatcher — runs every registered handler against its matched paths."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from systrigger.context import RunContext
from systrigger.handlers.base import Handler
from systrigger.logging import get_logger
from systrigger.registry import Registry
from systrigger.resolver import PathResolver
from systrigger.status import HandlerStatus, failure

log = get_logger(__name__)


@dataclass
class FailureRecord:
    """A single ``FAIL`` reported for one handler and one path."""

    handler: str
    path: str
    detail: str


@dataclass
class HandlerOutcome:
    """Per-handler tally for one dispatch run."""

    name: str
    applicable: bool = False
    successes: int = 0
    skips: int = 0
    failures: int = 0
    stopped: bool = False
    details: list[str] = field(default_factory=list)

    @property
    def status(self) -> str:
        if not self.applicable:
            return "not-applicable"
        if self.failures:
            return "failed"
        if self.successes:
            return "ok"
        return "skipped"


@dataclass
class RunResult:
    """Aggregate of every handler outcome in a dispatch run."""

    outcomes: list[HandlerOutcome] = field(default_factory=list)
    failures: list[FailureRecord] = field(default_factory=list)

    @property
    def executed(self) -> int:
        """Handlers whose ``exec`` was invoked at least once."""
        return sum(1 for o in self.outcomes if o.applicable)

    @property
    def failed(self) -> int:
        """Handlers that reported at least one failure."""
        return sum(1 for o in self.outcomes if o.failures)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


OutcomeSink = Callable[[HandlerOutcome], None]


def _invoke(handler: Handler, context: RunContext, path: Path) -> HandlerStatus:
    """Call ``exec``, turning anything other than a status into a failure."""
    try:
        status = handler.exec(context, path)
    except Exception as exc:
        return failure(f"Handler '{handler.name}' raised an exception: {exc}")
    if not isinstance(status, HandlerStatus):
        return failure(f"Handler '{handler.name}' returned {status!r} instead of a status")
    return status


def dispatch_handler(
    handler: Handler,
    resolver: PathResolver,
    context: RunContext,
    result: RunResult,
) -> HandlerOutcome:
    """Run one handler over its matches, recording failures into *result*."""
    outcome = HandlerOutcome(name=handler.name)

    for match in resolver.resolve(handler.paths, context.root):
        outcome.applicable = True
        log.info("processing", handler=handler.name, path=str(match.path), kind=match.kind.value)

        status = _invoke(handler, context, match.path)

        if status.failed:
            detail = status.detail or "handler reported failure"
            outcome.failures += 1
            outcome.details.append(detail)
            result.failures.append(FailureRecord(handler.name, str(match.path), detail))
            log.error("handler_failed", handler=handler.name, path=str(match.path), detail=detail)
        elif status.skipped:
            outcome.skips += 1
        else:
            outcome.successes += 1

        if status.stop:
            outcome.stopped = True
            break

    if not outcome.applicable:
        log.debug("not_applicable", handler=handler.name)
    return outcome


def run(
    registry: Registry,
    context: RunContext,
    on_outcome: OutcomeSink | None = None,
) -> RunResult:
    """Dispatch every handler in *registry* in registration order.

    Interest globs are validated up front, so a configuration fault aborts the
    run before any handler executes. Handler failures never stop the loop;
    they are collected into the returned :class:`RunResult`.

    Args:
        registry: The handlers to run. It is sealed by this call.
        context: Shared read-only run options.
        on_outcome: Optional callback receiving each handler's outcome.

    Raises:
        PatternError: If any handler carries a malformed interest glob.
    """
    registry.seal()
    for handler in registry:
        registry.resolver.validate(handler.paths)

    result = RunResult()
    for handler in registry:
        outcome = dispatch_handler(handler, registry.resolver, context, result)
        result.outcomes.append(outcome)
        if on_outcome is not None:
            on_outcome(outcome)

    log.info(
        "run_complete",
        executed=result.executed,
        failed=result.failed,
        failures=len(result.failures),
    )
    return result
