"""Locator: expected paths of config files, hook scripts and repositories."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from ricer.core.config import Settings


@dataclass(frozen=True)
class Locator:
    """Absolute paths ricer reads and writes. Callers validate paths themselves."""

    config_dir: Path
    hooks_dir: Path
    hooks_config: Path
    repos_dir: Path
    repos_config: Path
    home_dir: Path

    @classmethod
    def locate(cls, config_dir: Path, data_dir: Path, home_dir: Path | None = None) -> Locator:
        config_dir = Path(config_dir)
        locator = cls(
            config_dir=config_dir,
            hooks_dir=config_dir / "hooks",
            hooks_config=config_dir / "hooks.toml",
            repos_dir=Path(data_dir) / "repos",
            repos_config=config_dir / "repos.toml",
            home_dir=Path(home_dir) if home_dir is not None else Path.home(),
        )
        logger.debug("Configuration directory located at '{}'", locator.config_dir)
        logger.debug("Hook script directory located at '{}'", locator.hooks_dir)
        logger.debug("Repository directory located at '{}'", locator.repos_dir)
        return locator

    @classmethod
    def from_settings(cls, settings: Settings) -> Locator:
        return cls.locate(settings.config_dir, settings.data_dir, settings.home_dir)

    def repo_path(self, name: str) -> Path:
        """Storage path of a tracked repository's git directory."""
        return self.repos_dir / f"{name}.git"
