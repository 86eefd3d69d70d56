"""Tests for settings: env priority, XDG defaults, locator paths, logging setup."""

from pathlib import Path
from unittest.mock import patch

import pytest

from ricer.core.config import DEFAULT_HOOK_TIMEOUT, Settings, load_settings
from ricer.core.errors import RicerError, SettingsError
from ricer.core.locator import Locator
from ricer.core.logging import setup_logging
from ricer.hooks import TrustPolicy

ENV_VARS = (
    "RICER_CONFIG_DIR",
    "RICER_DATA_DIR",
    "RICER_RUN_HOOK",
    "RICER_HOOK_TIMEOUT",
    "RICER_PAGER",
    "RICER_LOG_LEVEL",
    "XDG_CONFIG_HOME",
    "XDG_DATA_HOME",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestSettingsDefaults:
    def test_trust_policy_prompt(self):
        assert Settings().run_hook is TrustPolicy.PROMPT

    def test_timeout(self):
        assert Settings().hook_timeout == DEFAULT_HOOK_TIMEOUT

    def test_pager_enabled(self):
        assert Settings().use_pager is True

    def test_xdg_fallbacks(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        s = Settings()
        assert s.config_dir == tmp_path / ".config" / "ricer"
        assert s.data_dir == tmp_path / ".local" / "share" / "ricer"

    def test_xdg_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "share"))
        s = Settings()
        assert s.config_dir == tmp_path / "cfg" / "ricer"
        assert s.data_dir == tmp_path / "share" / "ricer"

    def test_coerces_strings(self):
        s = Settings(config_dir="/a", data_dir="/b", home_dir="/c", run_hook="always")
        assert s.config_dir == Path("/a")
        assert s.home_dir == Path("/c")
        assert s.run_hook is TrustPolicy.ALWAYS


class TestLoadSettings:
    def test_env_dirs(self, monkeypatch, tmp_path):
        monkeypatch.setenv("RICER_CONFIG_DIR", str(tmp_path / "c"))
        monkeypatch.setenv("RICER_DATA_DIR", str(tmp_path / "d"))
        s = load_settings()
        assert s.config_dir == tmp_path / "c"
        assert s.data_dir == tmp_path / "d"

    def test_env_policy(self, monkeypatch):
        monkeypatch.setenv("RICER_RUN_HOOK", "Never")
        assert load_settings().run_hook is TrustPolicy.NEVER

    def test_cli_overrides_env(self, monkeypatch):
        monkeypatch.setenv("RICER_RUN_HOOK", "never")
        assert load_settings(run_hook="always").run_hook is TrustPolicy.ALWAYS

    def test_bad_policy(self, monkeypatch):
        monkeypatch.setenv("RICER_RUN_HOOK", "sometimes")
        with pytest.raises(SettingsError) as exc:
            load_settings()
        assert exc.value.variable == "RICER_RUN_HOOK"
        assert isinstance(exc.value, RicerError)
        assert "always|prompt|never" in str(exc.value)

    def test_bad_timeout(self, monkeypatch):
        monkeypatch.setenv("RICER_HOOK_TIMEOUT", "soon")
        with pytest.raises(SettingsError) as exc:
            load_settings()
        assert exc.value.variable == "RICER_HOOK_TIMEOUT"
        assert "'soon'" in str(exc.value)

    def test_policy_instance_argument(self):
        assert load_settings(run_hook=TrustPolicy.NEVER).run_hook is TrustPolicy.NEVER

    def test_timeout(self, monkeypatch):
        monkeypatch.setenv("RICER_HOOK_TIMEOUT", "12.5")
        assert load_settings().hook_timeout == 12.5

    def test_zero_timeout_disables(self, monkeypatch):
        monkeypatch.setenv("RICER_HOOK_TIMEOUT", "0")
        assert load_settings().hook_timeout is None

    def test_pager_disabled(self, monkeypatch):
        monkeypatch.setenv("RICER_PAGER", "0")
        assert load_settings().use_pager is False

    def test_verbose(self):
        assert load_settings(verbose=True).verbose is True

    def test_loads_dotenv(self):
        with patch("ricer.core.config.load_dotenv") as load:
            load_settings()
        load.assert_called_once()


class TestLocator:
    def test_paths(self, tmp_path):
        loc = Locator.locate(tmp_path / "config", tmp_path / "data", tmp_path / "home")
        assert loc.hooks_dir == tmp_path / "config" / "hooks"
        assert loc.hooks_config == tmp_path / "config" / "hooks.toml"
        assert loc.repos_config == tmp_path / "config" / "repos.toml"
        assert loc.repos_dir == tmp_path / "data" / "repos"
        assert loc.home_dir == tmp_path / "home"

    def test_repo_path(self, tmp_path):
        loc = Locator.locate(tmp_path / "config", tmp_path / "data", tmp_path)
        assert loc.repo_path("vim") == tmp_path / "data" / "repos" / "vim.git"

    def test_from_settings(self, tmp_path):
        s = Settings(config_dir=tmp_path / "c", data_dir=tmp_path / "d", home_dir=tmp_path)
        loc = Locator.from_settings(s)
        assert loc.config_dir == tmp_path / "c"
        assert loc.home_dir == tmp_path

    def test_home_defaults(self, tmp_path):
        loc = Locator.locate(tmp_path / "config", tmp_path / "data")
        assert loc.home_dir == Path.home()


class TestSetupLogging:
    def test_info_by_default(self):
        with patch("ricer.core.logging.logger") as log:
            setup_logging()
        log.remove.assert_called_once()
        assert log.add.call_args.kwargs["level"] == "INFO"

    def test_debug_when_verbose(self):
        with patch("ricer.core.logging.logger") as log:
            setup_logging(verbose=True)
        assert log.add.call_args.kwargs["level"] == "DEBUG"

    def test_env_level(self, monkeypatch):
        monkeypatch.setenv("RICER_LOG_LEVEL", "warning")
        with patch("ricer.core.logging.logger") as log:
            setup_logging(verbose=True)
        assert log.add.call_args.kwargs["level"] == "WARNING"
