"""Tests for systrigger.context."""

from pathlib import Path

import pytest

from systrigger.context import RunContext


class TestRunContext:
    def test_defaults(self) -> None:
        ctx = RunContext()
        assert ctx.root == Path("/")
        assert ctx.dry_run is False
        assert ctx.rooted is False

    def test_is_read_only(self) -> None:
        ctx = RunContext()
        with pytest.raises(AttributeError):
            ctx.dry_run = True  # type: ignore[misc]

    def test_under_root(self, tmp_path: Path) -> None:
        ctx = RunContext(root=tmp_path)
        assert ctx.under_root("/usr/share/fonts") == tmp_path / "usr/share/fonts"
        assert ctx.rooted is True

    def test_under_root_requires_absolute(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="absolute"):
            RunContext(root=tmp_path).under_root("usr/share")

    def test_is_within_root(self, tmp_path: Path) -> None:
        ctx = RunContext(root=tmp_path / "root")
        assert ctx.is_within_root(tmp_path / "root" / "usr")
        assert not ctx.is_within_root(tmp_path / "elsewhere")
