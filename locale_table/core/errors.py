from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

NoticeKind = Literal["read", "parse", "write"]


class CatalogError(Exception):
    """Base class for catalog editing errors."""


class SourceError(CatalogError):
    """A single language's JSON source could not be read, parsed or written."""

    kind: NoticeKind = "read"

    def __init__(self, language: str, message: str) -> None:
        super().__init__(f"{language}: {message}")
        self.language = language
        self.message = message

    def to_notice(self) -> Notice:
        return Notice(language=self.language, kind=self.kind, message=self.message)


class SourceReadError(SourceError):
    """Raised when a language file is missing or unreadable."""

    kind: NoticeKind = "read"


class SourceParseError(SourceError):
    """Raised when a language file does not contain valid JSON."""

    kind: NoticeKind = "parse"


class SourceWriteError(SourceError):
    """Raised when writing a language file back to disk fails."""

    kind: NoticeKind = "write"


class LanguageNotFoundError(CatalogError):
    """Raised when a command targets a language that has no storage unit."""


class LanguageExistsError(CatalogError):
    """Raised when creating or renaming onto a language that already exists."""


class InvalidLanguageError(CatalogError, ValueError):
    """Raised for blank language ids or ids that would escape the catalog folder."""


class InvalidKeyError(CatalogError, ValueError):
    """Raised for blank keys or a duplicate/rename onto the same key."""


class SessionNotConfiguredError(CatalogError):
    """Raised when no catalog folder (or nested file) has been selected yet."""


@dataclass(frozen=True)
class Notice:
    """User-visible report of a per-language failure."""

    language: str
    kind: NoticeKind
    message: str
