"""Format preserving TOML document with section scoped CRUD."""

from __future__ import annotations

from typing import NamedTuple

import tomlkit
from loguru import logger
from tomlkit.exceptions import ParseError, TOMLKitError
from tomlkit.items import Item, SingleKey, Table
from tomlkit.toml_document import TOMLDocument

from ricer.core.errors import DocumentParseError, EntryNotFound, NotATable, SectionNotFound


class DocumentEntry(NamedTuple):
    """A key and the tomlkit item bound to it."""

    key: str
    item: Item


class Document:
    """Parsed TOML data that keeps the user's formatting.

    Every operation targets one top-level table (a *section*). Edits replace or
    re-key items where they sit in the tree, so comments and whitespace of
    untouched entries survive a parse/serialize cycle byte for byte.
    """

    def __init__(self, doc: TOMLDocument | None = None):
        self._doc = doc if doc is not None else tomlkit.document()

    @classmethod
    def parse(cls, text: str) -> Document:
        try:
            doc = tomlkit.parse(text)
        except ParseError as err:
            raise DocumentParseError(str(err), line=err.line, col=err.col) from err
        except TOMLKitError as err:
            raise DocumentParseError(str(err)) from err
        return cls(doc)

    def serialize(self) -> str:
        return self._doc.as_string()

    def __str__(self) -> str:
        return self.serialize()

    # ── CRUD ────────────────────────────────────────────────────────

    def get(self, section: str, key: str) -> DocumentEntry:
        logger.debug("Get TOML entry '{}' from '{}' table", key, section)
        table = self._holder(section, key)
        return DocumentEntry(key, table.value.item(key))

    def add(self, section: str, key: str, item: Item) -> DocumentEntry | None:
        """Insert *item* under *key*, returning the entry it replaced if any.

        A missing section is created as an implicit table. Replacing an
        existing key keeps that key's indentation and comments. A fresh key
        goes to the last fragment of a section split around other tables.
        """
        logger.debug("Add TOML entry '{}' to '{}' table", key, section)
        try:
            tables = self._tables(section)
        except SectionNotFound:
            table = tomlkit.table()
            table.append(key, item)
            self._doc.append(section, table)
            return None

        for table in tables:
            if key in table:
                previous = DocumentEntry(key, table.value.item(key))
                table[key] = item
                return previous
        tables[-1][key] = item
        return None

    def remove(self, section: str, key: str) -> DocumentEntry:
        logger.debug("Remove TOML entry '{}' from '{}' table", key, section)
        table = self._holder(section, key)
        item = table.value.item(key)
        table.remove(key)
        return DocumentEntry(key, item)

    def rename(self, section: str, old: str, new: str) -> DocumentEntry:
        """Re-key an entry in place, returning the entry under its old key.

        Only the key token changes: position, spacing around ``=`` and
        trivia stay as they were. An existing entry named *new* is
        overwritten.
        """
        logger.debug("Rename TOML entry '{}' to '{}' in '{}' table", old, new, section)
        table = self._holder(section, old)
        item = table.value.item(old)
        if old == new:
            return DocumentEntry(old, item)
        for other in self._tables(section):
            if new in other:
                other.remove(new)

        container = table.value
        old_key = next(k for k, _ in container.body if k is not None and k.key == old)
        raw = old_key.as_string()
        trailing = raw[len(raw.rstrip()) :]
        new_key = SingleKey(new, sep=old_key.sep, original=SingleKey(new).as_string() + trailing)
        # tomlkit has no public rename, swap the key at its existing body index
        container._replace(old_key, new_key, item)
        dict.pop(table, old, None)
        dict.__setitem__(table, new, item)
        if isinstance(item, Table):
            item.invalidate_display_name()
        return DocumentEntry(old, item)

    def keys(self, section: str) -> list[str]:
        """Keys of *section* in document order, empty if the section is missing."""
        try:
            tables = self._tables(section)
        except SectionNotFound:
            return []
        # body order, renamed keys move to the end of tomlkit's dict view
        return [k.key for table in tables for k, _ in table.value.body if k is not None]

    # ── Lookup helpers ──────────────────────────────────────────────

    def _tables(self, section: str) -> list[Table]:
        """Concrete tables holding *section*, one per fragment in document order."""
        items = [item for k, item in self._doc.body if k is not None and k.key == section]
        if not items:
            raise SectionNotFound(section)
        if not all(isinstance(item, Table) for item in items):
            raise NotATable(section)
        return items

    def _holder(self, section: str, key: str) -> Table:
        for table in self._tables(section):
            if key in table:
                return table
        raise EntryNotFound(section, key)
