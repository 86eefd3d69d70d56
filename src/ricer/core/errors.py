"""Error taxonomy: parse, structure, IO and hook execution failures."""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class RicerError(Exception):
    """Base class for every error raised by ricer."""


# ── Document ────────────────────────────────────────────────────────


class DocumentParseError(RicerError):
    """Malformed TOML text."""

    def __init__(self, message: str, line: int | None = None, col: int | None = None):
        self.message = message
        self.line = line
        self.col = col
        super().__init__(f"failed to parse TOML data: {message}")


class StructureError(RicerError):
    """Document shape does not match what the caller asked for."""

    def __init__(self, section: str, key: str | None = None):
        self.section = section
        self.key = key
        super().__init__(self._describe())

    def _describe(self) -> str:
        return f"structure error in table '{self.section}'"


class SectionNotFound(StructureError):
    def _describe(self) -> str:
        return f"TOML table '{self.section}' not found"


class NotATable(StructureError):
    def _describe(self) -> str:
        return f"TOML table '{self.section}' not defined as a table"


class EntryNotFound(StructureError, KeyError):
    def _describe(self) -> str:
        return f"TOML entry '{self.key}' not found in table '{self.section}'"

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self._describe()


# ── Config files ────────────────────────────────────────────────────


class IOOperation(str, Enum):
    OPEN = "open"
    READ = "read"
    WRITE = "write"


class ConfigIOError(RicerError):
    """Filesystem failure while handling a config file or hook script."""

    def __init__(self, path: Path, operation: IOOperation):
        self.path = Path(path)
        self.operation = IOOperation(operation)
        super().__init__(f"failed to {self.operation.value} '{self.path}'")


class ConfigParseError(RicerError):
    """A config file exists but is not valid TOML."""

    def __init__(self, path: Path, error: DocumentParseError):
        self.path = Path(path)
        self.error = error
        super().__init__(f"failed to parse '{self.path}': {error.message}")


# ── Settings ────────────────────────────────────────────────────────


class SettingsError(RicerError):
    """An environment variable holds a value ricer cannot use."""

    def __init__(self, variable: str, value: str, expected: str):
        self.variable = variable
        self.value = value
        super().__init__(f"invalid {variable} value '{value}', expected {expected}")


# ── Hooks ───────────────────────────────────────────────────────────


class HookScriptError(RicerError):
    """Hook name does not address a file inside the hooks directory."""

    def __init__(self, name: str, hooks_dir: Path):
        self.name = name
        self.hooks_dir = Path(hooks_dir)
        super().__init__(f"hook '{name}' is outside of '{self.hooks_dir}'")


class HookExecutionError(RicerError):
    """Hook script wrote to stderr, could not be spawned, or timed out."""

    def __init__(self, script: str, exit_code: int, stderr: str):
        self.script = script
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(f"hook '{script}' failed ({exit_code}): {stderr.strip()}")
