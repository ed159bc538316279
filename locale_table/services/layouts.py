# locale_table/services/layouts.py
"""
Where each language's JSON document lives on disk.

Two layouts are supported:

- FlatLayout:   <root>/<lang>.json
- NestedLayout: <root>/<lang>/<file_name>   (one selected file at a time)

Layouts own storage units (files and folders) and the conversion between a
stored document and its flat catalog. Every failure on that path is raised as
a SourceError carrying the language label, so callers can turn it into a
per-language notice.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from locale_table.core.codec import FlatCatalog, flatten, unflatten
from locale_table.core.errors import (
    InvalidLanguageError,
    LanguageExistsError,
    LanguageNotFoundError,
    SourceParseError,
    SourceReadError,
    SourceWriteError,
)

logger = logging.getLogger(__name__)

JSON_SUFFIX = ".json"


def validate_language_id(language: str) -> str:
    """Return a stripped language id or raise if it cannot name a file/folder."""
    lang = (language or "").strip()
    if not lang:
        raise InvalidLanguageError("Language id must not be empty")
    if "/" in lang or "\\" in lang or lang in (".", "..") or ".." in lang:
        raise InvalidLanguageError(f"Invalid language id '{language}'")
    return lang


def dump_document(doc: Any, indent: int = 2) -> str:
    return json.dumps(doc, ensure_ascii=False, indent=indent) + "\n"


class CatalogLayout(ABC):
    """Storage of one JSON document per language; read/write helpers are shared."""

    structure: str
    root: Path
    indent: int = 2

    @abstractmethod
    def languages(self) -> list[str]:
        """Languages that currently have a document, in discovery order."""

    @abstractmethod
    def path_for(self, language: str) -> Path:
        """Location of one language's document."""

    @abstractmethod
    def create(self, language: str) -> Path:
        """Create an empty ``{}`` document for a new language."""

    @abstractmethod
    def rename(self, old: str, new: str) -> Path:
        """Rename a language's storage unit; raises if missing or taken."""

    def label(self, language: str) -> str:
        """Name used for a language in notices and log lines."""
        return language

    def read_text(self, language: str) -> str:
        path = self.path_for(language)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceReadError(
                self.label(language), f"Error reading {path.name}: {exc}"
            ) from exc

    def load(self, language: str) -> Any:
        """Read and parse one language's document."""
        text = self.read_text(language)
        name = self.path_for(language).name
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise SourceParseError(self.label(language), f"Invalid JSON in {name}: {exc}") from exc
        except RecursionError as exc:
            raise SourceParseError(self.label(language), f"{name} is nested too deeply") from exc

    def load_flat(self, language: str) -> FlatCatalog:
        """Read one language's document as a flat catalog."""
        doc = self.load(language)
        try:
            return flatten(doc)
        except RecursionError as exc:
            raise SourceParseError(
                self.label(language), f"{self.path_for(language).name} is nested too deeply"
            ) from exc

    def save(self, language: str, doc: Any) -> None:
        """Overwrite one language's document in full."""
        path = self.path_for(language)
        try:
            text = dump_document(doc, self.indent)
        except RecursionError as exc:
            raise SourceWriteError(
                self.label(language), f"Document for {path.name} is nested too deeply"
            ) from exc
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise SourceWriteError(
                self.label(language), f"Error saving {path.name}: {exc}"
            ) from exc
        logger.debug("Wrote %s", path)

    def save_flat(self, language: str, flat: FlatCatalog) -> None:
        """Rebuild the nested document from ``flat`` and overwrite the file."""
        try:
            doc = unflatten(flat)
        except RecursionError as exc:
            raise SourceWriteError(
                self.label(language), "Key paths are nested too deeply"
            ) from exc
        self.save(language, doc)


class FlatLayout(CatalogLayout):
    """One ``<lang>.json`` file per language in a single folder."""

    structure = "flat"

    def __init__(self, root: Path, indent: int = 2) -> None:
        self.root = Path(root)
        self.indent = indent

    def languages(self) -> list[str]:
        # Discovery order: directory listing sorted by file name.
        if not self.root.is_dir():
            return []
        return [
            p.stem
            for p in sorted(self.root.iterdir(), key=lambda p: p.name)
            if p.is_file() and p.suffix == JSON_SUFFIX
        ]

    def path_for(self, language: str) -> Path:
        return self.root / f"{language}{JSON_SUFFIX}"

    def create(self, language: str) -> Path:
        lang = validate_language_id(language)
        path = self.path_for(lang)
        if path.exists():
            raise LanguageExistsError(f"Language '{lang}' already exists")
        self.root.mkdir(parents=True, exist_ok=True)
        try:
            path.write_text(dump_document({}, self.indent), encoding="utf-8")
        except OSError as exc:
            raise SourceWriteError(lang, f"Error creating {path.name}: {exc}") from exc
        return path

    def rename(self, old: str, new: str) -> Path:
        src = self.path_for(validate_language_id(old))
        dst = self.path_for(validate_language_id(new))
        if not src.is_file():
            raise LanguageNotFoundError(f"Language '{old}' not found")
        if dst.exists():
            raise LanguageExistsError(f"Language '{new}' already exists")
        try:
            src.rename(dst)
        except OSError as exc:
            raise SourceWriteError(old, f"Error renaming {old}: {exc}") from exc
        return dst


class NestedLayout(CatalogLayout):
    """One folder per language; ``file_name`` is edited across all of them."""

    structure = "nested"

    def __init__(self, root: Path, file_name: str, indent: int = 2) -> None:
        self.root = Path(root)
        self.file_name = file_name
        self.indent = indent

    def language_folders(self) -> list[str]:
        if not self.root.is_dir():
            return []
        return sorted(p.name for p in self.root.iterdir() if p.is_dir())

    def languages(self) -> list[str]:
        # Folders that have not started this file yet are skipped.
        return [
            lang for lang in self.language_folders() if self.path_for(lang).is_file()
        ]

    def path_for(self, language: str) -> Path:
        return self.root / language / self.file_name

    def label(self, language: str) -> str:
        return f"{language}/{self.file_name}"

    def create(self, language: str) -> Path:
        lang = validate_language_id(language)
        path = self.path_for(lang)
        if path.exists():
            raise LanguageExistsError(f"Language '{lang}' already has {self.file_name}")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(dump_document({}, self.indent), encoding="utf-8")
        except OSError as exc:
            raise SourceWriteError(lang, f"Error creating {lang}/{self.file_name}: {exc}") from exc
        return path

    def rename(self, old: str, new: str) -> Path:
        src = self.root / validate_language_id(old)
        dst = self.root / validate_language_id(new)
        if not src.is_dir():
            raise LanguageNotFoundError(f"Language '{old}' not found")
        if dst.exists():
            raise LanguageExistsError(f"Language '{new}' already exists")
        try:
            src.rename(dst)
        except OSError as exc:
            raise SourceWriteError(old, f"Error renaming {old}: {exc}") from exc
        return dst


def list_nested_files(root: Path) -> list[str]:
    """Sorted union of JSON file names found across language folders."""
    root = Path(root)
    if not root.is_dir():
        return []
    names: set[str] = set()
    for folder in root.iterdir():
        if folder.is_dir():
            names.update(
                p.name for p in folder.iterdir() if p.is_file() and p.suffix == JSON_SUFFIX
            )
    return sorted(names)
