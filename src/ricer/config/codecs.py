"""Entry codecs: translate typed entries to and from document items."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import tomlkit
from tomlkit.items import Item

from .document import Document
from .entries import Bootstrap, CommandHook, Hook, OsType, Repository

if TYPE_CHECKING:
    from ricer.core.locator import Locator

E = TypeVar("E", Repository, CommandHook)


def _unwrap(item: Item) -> Any:
    return item.unwrap() if hasattr(item, "unwrap") else item


def _opt_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _str_list(value: Any) -> list[str] | None:
    if not isinstance(value, list):
        return None
    return [v.strip("\"'") for v in value if isinstance(v, str)]


class EntryCodec(ABC, Generic[E]):
    """CRUD over one document section in terms of typed entries."""

    section: str

    @abstractmethod
    def location(self, locator: Locator) -> Path: ...

    @abstractmethod
    def encode(self, entry: E) -> tuple[str, Item]: ...

    @abstractmethod
    def decode(self, key: str, item: Item) -> E: ...

    def get(self, doc: Document, key: str) -> E:
        return self.decode(*doc.get(self.section, key))

    def add(self, doc: Document, entry: E) -> E | None:
        previous = doc.add(self.section, *self.encode(entry))
        return self.decode(*previous) if previous is not None else None

    def remove(self, doc: Document, key: str) -> E:
        return self.decode(*doc.remove(self.section, key))

    def rename(self, doc: Document, old: str, new: str) -> E:
        return self.decode(*doc.rename(self.section, old, new))

    def keys(self, doc: Document) -> list[str]:
        return doc.keys(self.section)


class RepositoryCodec(EntryCodec[Repository]):
    """``[repos.<name>]`` tables with an optional ``bootstrap`` sub-table."""

    section = "repos"

    def location(self, locator: Locator) -> Path:
        return locator.repos_config

    def encode(self, entry: Repository) -> tuple[str, Item]:
        repo = tomlkit.table()
        repo.add("branch", entry.branch)
        repo.add("remote", entry.remote)
        repo.add("workdir_home", entry.workdir_home)

        bootstrap = entry.bootstrap
        if bootstrap is not None and not bootstrap.is_empty():
            table = tomlkit.table()
            if bootstrap.clone is not None:
                table.add("clone", bootstrap.clone)
            if bootstrap.os is not None:
                table.add("os", OsType(bootstrap.os).value)
            if bootstrap.users is not None:
                table.add("users", list(bootstrap.users))
            if bootstrap.hosts is not None:
                table.add("hosts", list(bootstrap.hosts))
            repo.add("bootstrap", table)
        return entry.name, repo

    def decode(self, key: str, item: Item) -> Repository:
        data = _unwrap(item)
        if not isinstance(data, dict):
            return Repository(name=key)

        workdir_home = data.get("workdir_home")
        repo = Repository(
            name=key,
            branch=_opt_str(data.get("branch")) or "",
            remote=_opt_str(data.get("remote")) or "",
            workdir_home=workdir_home if isinstance(workdir_home, bool) else False,
        )

        raw = data.get("bootstrap")
        if isinstance(raw, dict):
            os_name = _opt_str(raw.get("os"))
            bootstrap = Bootstrap(
                clone=_opt_str(raw.get("clone")),
                os=OsType.parse(os_name) if os_name is not None else None,
                users=_str_list(raw.get("users")),
                hosts=_str_list(raw.get("hosts")),
            )
            if not bootstrap.is_empty():
                repo.bootstrap = bootstrap
        return repo


class HookCodec(EntryCodec[CommandHook]):
    """``<cmd> = [ { pre = ..., post = ... }, ... ]`` arrays in ``[hooks]``."""

    section = "hooks"
    FIELDS = ("pre", "post", "workdir", "repo")

    def location(self, locator: Locator) -> Path:
        return locator.hooks_config

    def encode(self, entry: CommandHook) -> tuple[str, Item]:
        # one inline table per line, closing bracket on its own line
        tables = [self._inline(hook) for hook in entry.hooks]
        body = ",".join(f"\n    {t}" for t in tables)
        raw = f"[{body}\n]" if tables else "[]"
        return entry.cmd, tomlkit.value(raw)

    def decode(self, key: str, item: Item) -> CommandHook:
        cmd_hook = CommandHook(cmd=key)
        data = _unwrap(item)
        if not isinstance(data, list):
            return cmd_hook
        for raw in data:
            if not isinstance(raw, dict):
                continue
            cmd_hook.add_hook(Hook(**{name: _opt_str(raw.get(name)) for name in self.FIELDS}))
        return cmd_hook

    def _inline(self, hook: Hook) -> str:
        pairs = [
            f"{name} = {tomlkit.string(value).as_string()}"
            for name in self.FIELDS
            if (value := getattr(hook, name)) is not None
        ]
        return "{ " + ", ".join(pairs) + " }" if pairs else "{}"
