"""Config files: format preserving TOML documents, entry codecs, managers."""

from .codecs import EntryCodec, HookCodec, RepositoryCodec
from .document import Document, DocumentEntry
from .entries import Bootstrap, CommandHook, Hook, OsType, Repository
from .manager import ConfigManager

__all__ = [
    "Bootstrap",
    "CommandHook",
    "ConfigManager",
    "Document",
    "DocumentEntry",
    "EntryCodec",
    "Hook",
    "HookCodec",
    "OsType",
    "Repository",
    "RepositoryCodec",
]
