"""ConfigManager: one TOML config file, one entry codec."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Generic

from loguru import logger

from ricer.core.errors import ConfigIOError, ConfigParseError, DocumentParseError, IOOperation

from .codecs import E, EntryCodec
from .document import Document

if TYPE_CHECKING:
    from ricer.core.locator import Locator


class ConfigManager(Generic[E]):
    """Typed access to a config file that preserves its formatting.

    The codec fixes which section of the file is managed and where the file
    lives according to the locator. Edits stay in memory until ``save()``.
    """

    def __init__(self, codec: EntryCodec[E], locator: Locator, document: Document | None = None):
        self.codec = codec
        self.locator = locator
        self.document = document if document is not None else Document()

    @classmethod
    def load(cls, codec: EntryCodec[E], locator: Locator) -> ConfigManager[E]:
        """Read and parse the codec's config file.

        A missing file yields an empty document and its parent directory is
        created so a later ``save()`` can write it.
        """
        path = codec.location(locator)
        logger.debug("Load configuration file '{}'", path)
        if not path.exists():
            _mkdir_parent(path)
            return cls(codec, locator)

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as err:
            raise ConfigIOError(path, IOOperation.READ) from err
        try:
            document = Document.parse(text)
        except DocumentParseError as err:
            raise ConfigParseError(path, err) from err
        return cls(codec, locator, document)

    @property
    def path(self) -> Path:
        return self.codec.location(self.locator)

    def save(self) -> None:
        """Write the document back through a temporary file and an atomic rename."""
        path = self.path
        logger.debug("Save configuration file '{}'", path)
        _mkdir_parent(path)
        try:
            fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        except OSError as err:
            raise ConfigIOError(path, IOOperation.OPEN) from err
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
                fh.write(self.document.serialize())
            os.chmod(tmp, stat.S_IMODE(path.stat().st_mode) if path.exists() else 0o644)
            os.replace(tmp, path)
        except OSError as err:
            Path(tmp).unlink(missing_ok=True)
            raise ConfigIOError(path, IOOperation.WRITE) from err

    # ── Entries ─────────────────────────────────────────────────────

    def get(self, key: str) -> E:
        return self.codec.get(self.document, key)

    def add(self, entry: E) -> E | None:
        return self.codec.add(self.document, entry)

    def remove(self, key: str) -> E:
        return self.codec.remove(self.document, key)

    def rename(self, old: str, new: str) -> E:
        return self.codec.rename(self.document, old, new)

    def keys(self) -> list[str]:
        return self.codec.keys(self.document)

    def __str__(self) -> str:
        return self.document.serialize()


def _mkdir_parent(path: Path) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise ConfigIOError(path.parent, IOOperation.OPEN) from err
