"""Append-only JSONL run history."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path

from systrigger.logging import get_logger
from systrigger.runner import HandlerOutcome

log = get_logger(__name__)


@dataclass
class HistoryEvent:
    """One handler outcome from one dispatch run."""

    handler: str
    status: str
    detail: str = ""
    successes: int = 0
    skips: int = 0
    failures: int = 0


def write_history(history_path: Path | str, event: HistoryEvent) -> Path:
    """Append *event* to the history file, creating parent directories.

    A UTC ISO-8601 timestamp is added automatically.

    Returns:
        Path to the history file.
    """
    path = Path(history_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    record = asdict(event)
    record["timestamp"] = datetime.now(UTC).isoformat()

    with path.open("a", encoding="utf-8") as fh:
        fh.write(json.dumps(record, ensure_ascii=False) + "\n")

    return path


def read_history(history_path: Path | str, last_n: int = 20) -> list[dict]:
    """Read the most recent *last_n* entries, newest first."""
    path = Path(history_path)
    if not path.exists():
        return []

    entries: list[dict] = []
    for lineno, line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
        if not line.strip():
            continue
        try:
            entries.append(json.loads(line))
        except json.JSONDecodeError:
            log.warning("history_line_unreadable", path=str(path), line=lineno)
    return list(reversed(entries[-last_n:]))


class HistoryRecorder:
    """Outcome sink for :func:`systrigger.runner.run` that writes history."""

    def __init__(self, history_path: Path | str) -> None:
        self.history_path = Path(history_path)

    def __call__(self, outcome: HandlerOutcome) -> None:
        event = HistoryEvent(
            handler=outcome.name,
            status=outcome.status,
            detail="; ".join(outcome.details),
            successes=outcome.successes,
            skips=outcome.skips,
            failures=outcome.failures,
        )
        try:
            write_history(self.history_path, event)
        except OSError as exc:
            log.warning("history_write_failed", path=str(self.history_path), error=str(exc))
