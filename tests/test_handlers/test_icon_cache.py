"""Tests for the icon-cache handler."""

from pathlib import Path

from conftest import FakeRunner
from systrigger.context import RunContext
from systrigger.handlers import icon_cache
from systrigger.handlers.icon_cache import run
from systrigger.registry import Registry
from systrigger.runner import run as dispatch


class TestIconCache:
    def test_theme_directory_updated_without_break(
        self, sysroot: Path, context: RunContext
    ) -> None:
        theme = sysroot / "usr/share/icons/hicolor"
        status = run(context, theme)
        assert status.succeeded
        assert not status.stop
        runner: FakeRunner = context.commands  # type: ignore[assignment]
        assert runner.calls == [["/usr/bin/gtk-update-icon-cache", "-ftq", str(theme)]]

    def test_directory_without_index_skipped(self, sysroot: Path, context: RunContext) -> None:
        bare = sysroot / "usr/share/icons/bare"
        bare.mkdir()
        assert run(context, bare).skipped

    def test_every_theme_processed(self, sysroot: Path, fake_runner: FakeRunner) -> None:
        registry = Registry()
        registry.register(icon_cache.NAME, icon_cache.PATHS, icon_cache.run)
        result = dispatch(registry, RunContext(root=sysroot, commands=fake_runner))

        outcome = result.outcomes[0]
        assert outcome.successes == 2
        assert outcome.skips == 1
        assert len(fake_runner.calls) == 2

    def test_failure_continues_to_next_theme(self, sysroot: Path) -> None:
        runner = FakeRunner(returncodes={"gtk-update-icon-cache": 1})
        status = run(RunContext(root=sysroot, commands=runner), sysroot / "usr/share/icons/hicolor")
        assert status.failed
        assert not status.stop
        assert "hicolor" in status.detail
