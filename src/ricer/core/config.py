"""Configuration: env, XDG paths, hook trust policy."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from ricer.core.errors import SettingsError
from ricer.hooks import TrustPolicy

APP_NAME = "ricer"
DEFAULT_HOOK_TIMEOUT = 300.0


def _xdg_dir(env_var: str, fallback: str) -> Path:
    base = os.getenv(env_var)
    root = Path(base) if base else Path.home() / fallback
    return root / APP_NAME


@dataclass
class Settings:
    config_dir: Path = field(default_factory=lambda: _xdg_dir("XDG_CONFIG_HOME", ".config"))
    data_dir: Path = field(default_factory=lambda: _xdg_dir("XDG_DATA_HOME", ".local/share"))
    home_dir: Path = field(default_factory=Path.home)
    run_hook: TrustPolicy = TrustPolicy.PROMPT
    hook_timeout: float | None = DEFAULT_HOOK_TIMEOUT
    use_pager: bool = True
    verbose: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.run_hook, str):
            self.run_hook = TrustPolicy(self.run_hook)
        self.config_dir = Path(self.config_dir)
        self.data_dir = Path(self.data_dir)
        self.home_dir = Path(self.home_dir)


def _parse_policy(raw: str | TrustPolicy, source: str) -> TrustPolicy:
    if isinstance(raw, TrustPolicy):
        return raw
    try:
        return TrustPolicy(raw.strip().lower())
    except ValueError as err:
        choices = "|".join(p.value for p in TrustPolicy)
        raise SettingsError(source, raw, choices) from err


def _parse_timeout(raw: str) -> float | None:
    try:
        value = float(raw)
    except ValueError as err:
        raise SettingsError("RICER_HOOK_TIMEOUT", raw, "a number of seconds") from err
    return value if value > 0 else None


def load_settings(
    run_hook: str | TrustPolicy | None = None,
    verbose: bool = False,
) -> Settings:
    """Load settings with priority: CLI args > env > .env > defaults."""
    load_dotenv()

    settings = Settings()
    settings.verbose = verbose

    if config_dir := os.getenv("RICER_CONFIG_DIR"):
        settings.config_dir = Path(config_dir).expanduser()
    if data_dir := os.getenv("RICER_DATA_DIR"):
        settings.data_dir = Path(data_dir).expanduser()
    if env_policy := os.getenv("RICER_RUN_HOOK"):
        settings.run_hook = _parse_policy(env_policy, "RICER_RUN_HOOK")
    if env_timeout := os.getenv("RICER_HOOK_TIMEOUT"):
        settings.hook_timeout = _parse_timeout(env_timeout)
    if os.getenv("RICER_PAGER", "").strip() == "0":
        settings.use_pager = False

    if run_hook:
        settings.run_hook = _parse_policy(run_hook, "--run-hook")

    return settings
