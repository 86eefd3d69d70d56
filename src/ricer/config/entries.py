"""Config entry models: Repository, Bootstrap, OsType, CommandHook, Hook."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OsType(str, Enum):
    """Operating system a repository may be bootstrapped on."""

    ANY = "any"
    UNIX = "unix"
    MACOS = "macos"
    WINDOWS = "windows"

    @classmethod
    def parse(cls, raw: str) -> OsType:
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.ANY

    def __str__(self) -> str:
        return self.value


@dataclass
class Bootstrap:
    """Where to clone a repository from and which machines should receive it."""

    clone: str | None = None
    os: OsType | None = None
    users: list[str] | None = None
    hosts: list[str] | None = None

    def is_empty(self) -> bool:
        return self.clone is None and self.os is None and self.users is None and self.hosts is None


@dataclass
class Repository:
    """A tracked repository. The name doubles as its key in the ``repos`` table."""

    name: str
    branch: str = ""
    remote: str = ""
    workdir_home: bool = False  # working tree is $HOME (fake bare repository)
    bootstrap: Bootstrap | None = None


@dataclass
class Hook:
    """One hook definition: scripts to run before/after a command."""

    pre: str | None = None
    post: str | None = None
    workdir: str | None = None
    repo: str | None = None

    def script(self, phase: str) -> str | None:
        return self.pre if phase == "pre" else self.post


@dataclass
class CommandHook:
    """Ordered hook definitions bound to one command name."""

    cmd: str
    hooks: list[Hook] = field(default_factory=list)

    def add_hook(self, hook: Hook) -> CommandHook:
        self.hooks.append(hook)
        return self
