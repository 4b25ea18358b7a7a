"""Tests for systrigger.config."""

from pathlib import Path

import pytest

from systrigger import config as config_module
from systrigger.config import Config, load_config
from systrigger.errors import ConfigurationError


class TestConfigModel:
    def test_defaults(self) -> None:
        c = Config()
        assert c.root == "/"
        assert c.disabled_handlers == []
        assert c.command_timeout is None
        assert c.log_format == "console"
        assert c.triggers == []

    def test_root_path_resolves(self) -> None:
        assert Config(root=".").root_path().is_absolute()

    def test_deduplicates_disabled_handlers(self) -> None:
        c = Config(disabled_handlers=["fonts", "mime", "fonts"])
        assert c.disabled_handlers == ["fonts", "mime"]

    def test_history_path_relative_to_root(self, tmp_path: Path) -> None:
        c = Config(root=str(tmp_path), history_file="var/log/h.jsonl")
        assert c.history_path() == tmp_path.resolve() / "var/log/h.jsonl"
        assert c.history_path(Path("/mnt")) == Path("/mnt/var/log/h.jsonl")

    def test_history_path_absolute_and_disabled(self) -> None:
        assert Config(history_file="/tmp/h.jsonl").history_path() == Path("/tmp/h.jsonl")
        assert Config(history_file=None).history_path() is None

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="positive"):
            Config(command_timeout=0)

    def test_log_format_restricted(self) -> None:
        with pytest.raises(ValueError):
            Config(log_format="xml")


class TestLoadConfig:
    def test_load_valid_config(self, tmp_path: Path) -> None:
        path = tmp_path / "systrigger.yaml"
        path.write_text(
            "root: /mnt\n"
            "command_timeout: 30\n"
            "disabled_handlers: [hwdb]\n"
            "triggers:\n"
            "  - name: foo\n"
            "    paths: [/usr/share/foo]\n"
            "    bins:\n"
            "      - task: Foo\n"
            "        bin: /usr/bin/foo\n",
            encoding="utf-8",
        )
        c = load_config(path)
        assert c.root == "/mnt"
        assert c.command_timeout == 30
        assert c.disabled_handlers == ["hwdb"]
        assert c.triggers[0].name == "foo"

    def test_missing_explicit_file_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            load_config("/nonexistent/systrigger.yaml")

    def test_missing_default_file_gives_defaults(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", tmp_path / "absent.yaml")
        assert load_config() == Config()

    def test_empty_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "systrigger.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="empty"):
            load_config(path)

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "systrigger.yaml"
        path.write_text("just a string", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)

    def test_validation_error_wrapped(self, tmp_path: Path) -> None:
        path = tmp_path / "systrigger.yaml"
        path.write_text("command_timeout: -5\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid config file"):
            load_config(path)

    def test_yaml_syntax_error_wrapped(self, tmp_path: Path) -> None:
        path = tmp_path / "systrigger.yaml"
        path.write_text("root: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Unable to read"):
            load_config(path)

    def test_empty_disabled_handlers_is_config_error(self, tmp_path: Path) -> None:
        path = tmp_path / "systrigger.yaml"
        path.write_text("root: /\ndisabled_handlers:\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid config file"):
            load_config(path)

    def test_scalar_disabled_handlers_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "systrigger.yaml"
        path.write_text("disabled_handlers: hwdb\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="must be a list"):
            load_config(path)
