"""systrigger CLI — Typer entry point with Rich formatting."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from systrigger.commands import DryRunRunner, SubprocessRunner
from systrigger.config import Config, load_config
from systrigger.context import RunContext
from systrigger.errors import ConfigurationError
from systrigger.history import HistoryRecorder, read_history
from systrigger.logging import configure_logging
from systrigger.registry import default_registry
from systrigger.runner import RunResult, run

app = typer.Typer(
    name="systrigger",
    help="systrigger — re-run system maintenance tools after package changes.",
    no_args_is_help=True,
)
console = Console()

# Exit status when nothing ran because the configuration is broken.
CONFIG_ERROR_EXIT = 2

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Path to systrigger.yaml"),
]

_STATUS_STYLES = {
    "ok": "green",
    "failed": "red",
    "skipped": "yellow",
    "not-applicable": "dim",
}


def _load(config_path: Path | None) -> Config:
    """Load the configuration or exit with the configuration-fault status."""
    try:
        return load_config(config_path)
    except ConfigurationError as exc:
        console.print(f"[red]Configuration error: {escape(str(exc))}[/red]")
        raise typer.Exit(code=CONFIG_ERROR_EXIT) from exc


def _print_summary(result: RunResult, dry_run: bool) -> None:
    table = Table(title="Trigger Run" + (" (dry run)" if dry_run else ""))
    table.add_column("Handler", style="magenta")
    table.add_column("Status")
    table.add_column("OK", justify="right")
    table.add_column("Skipped", justify="right")
    table.add_column("Failed", justify="right")

    for outcome in result.outcomes:
        style = _STATUS_STYLES[outcome.status]
        table.add_row(
            outcome.name,
            f"[{style}]{outcome.status}[/{style}]",
            str(outcome.successes),
            str(outcome.skips),
            str(outcome.failures),
        )

    console.print(table)

    for record in result.failures:
        console.print(
            f"  [red]Failed:[/red] {record.handler} ({escape(record.path)}): {escape(record.detail)}"
        )

    console.print(f"\n{result.executed} handler(s) executed, {result.failed} failed.")


@app.command(name="run")
def run_cmd(
    names: Annotated[
        list[str] | None,
        typer.Argument(help="Handlers to run (default: all registered handlers)"),
    ] = None,
    config: ConfigOption = None,
    root: Annotated[
        Path | None, typer.Option("--root", "-r", help="Operate on an alternative root")
    ] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", "-n", help="Show commands without running them")
    ] = False,
    force: Annotated[bool, typer.Option("--force", "-f", help="Ignore trigger skip rules")] = False,
    chroot: Annotated[bool, typer.Option("--chroot", help="Running inside a chroot")] = False,
    live: Annotated[bool, typer.Option("--live", help="Running on a live medium")] = False,
    debug: Annotated[bool, typer.Option("--debug", "-d", help="Enable debug output")] = False,
    log_format: Annotated[
        str | None, typer.Option("--log-format", help="console or json")
    ] = None,
) -> None:
    """Run the triggers whose interest paths exist."""
    cfg = _load(config)
    configure_logging("debug" if debug else cfg.log_level, log_format or cfg.log_format)

    run_root = root.resolve() if root else cfg.root_path()
    commands = DryRunRunner() if dry_run else SubprocessRunner(timeout=cfg.command_timeout)
    context = RunContext(
        root=run_root,
        dry_run=dry_run,
        force=force,
        chroot=chroot,
        live=live,
        commands=commands,
    )

    history = cfg.history_path(run_root)
    recorder = HistoryRecorder(history) if history and not dry_run else None

    try:
        registry = default_registry(cfg)
        if names:
            registry = registry.select(names)
        result = run(registry, context, on_outcome=recorder)
    except ConfigurationError as exc:
        console.print(f"[red]Configuration error: {escape(str(exc))}[/red]")
        raise typer.Exit(code=CONFIG_ERROR_EXIT) from exc

    _print_summary(result, dry_run)
    if not result.ok:
        raise typer.Exit(code=result.exit_code)


@app.command(name="list")
def list_cmd(config: ConfigOption = None) -> None:
    """List registered handlers and the paths they watch."""
    cfg = _load(config)
    try:
        registry = default_registry(cfg)
    except ConfigurationError as exc:
        console.print(f"[red]Configuration error: {escape(str(exc))}[/red]")
        raise typer.Exit(code=CONFIG_ERROR_EXIT) from exc

    table = Table(title="Available Triggers")
    table.add_column("#", style="cyan", width=3)
    table.add_column("Name", style="magenta")
    table.add_column("Description")
    table.add_column("Paths")

    for i, handler in enumerate(registry, start=1):
        table.add_row(str(i), handler.name, handler.description, "\n".join(handler.paths))

    console.print(table)


@app.command()
def history(
    config: ConfigOption = None,
    count: Annotated[int, typer.Option("--count", "-n", help="Number of entries")] = 20,
    root: Annotated[
        Path | None, typer.Option("--root", "-r", help="Read history of an alternative root")
    ] = None,
) -> None:
    """Show recent run-history entries."""
    cfg = _load(config)
    path = cfg.history_path(root.resolve() if root else None)
    entries = read_history(path, last_n=count) if path else []

    if not entries:
        console.print("[dim]No history entries found.[/dim]")
        return

    table = Table(title="Run History (most recent first)")
    table.add_column("Timestamp", style="cyan", no_wrap=True)
    table.add_column("Handler", style="magenta")
    table.add_column("Status")
    table.add_column("Detail", max_width=60)

    for entry in entries:
        ts = entry.get("timestamp", "?")[:19]
        handler = entry.get("handler", "?")
        status = entry.get("status", "?")
        detail = entry.get("detail", "")[:60]
        style = _STATUS_STYLES.get(status, "white")
        table.add_row(ts, handler, f"[{style}]{status}[/{style}]", escape(detail))

    console.print(table)


@app.command(name="config")
def show_config(config: ConfigOption = None) -> None:
    """Display the effective configuration."""
    cfg = _load(config)

    table = Table(title="systrigger Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    history_path = cfg.history_path()
    table.add_row("Root", str(cfg.root_path()))
    table.add_row("Disabled handlers", ", ".join(cfg.disabled_handlers) or "(none)")
    table.add_row(
        "Command timeout",
        f"{cfg.command_timeout}s" if cfg.command_timeout else "[dim]none[/dim]",
    )
    table.add_row("History file", str(history_path) if history_path else "[dim]disabled[/dim]")
    table.add_row("Log level", cfg.log_level)
    table.add_row("Log format", cfg.log_format)
    table.add_row("Triggers dir", cfg.triggers_dir or "(none)")
    table.add_row("Inline triggers", ", ".join(t.name for t in cfg.triggers) or "(none)")

    console.print(table)
