# locale_table/services/aggregator.py
"""
Cross-language table model built from per-language JSON sources.

Every scan reads the sources fresh, flattens each document and unions the key
paths. Nothing is cached between scans.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path

from locale_table.core.codec import FlatCatalog, flatten
from locale_table.core.errors import Notice, SourceError, SourceParseError
from locale_table.services.layouts import CatalogLayout, FlatLayout, NestedLayout

logger = logging.getLogger(__name__)


@dataclass
class Progress:
    completed: int
    total: int
    percentage: int


@dataclass
class CatalogTable:
    """Union of keys across languages plus the per-language flat catalogs."""

    languages: list[str]
    keys: list[str]
    data: dict[str, FlatCatalog]
    notices: list[Notice] = field(default_factory=list)

    def value(self, language: str, key: str) -> str | None:
        """Cell value, or None for a missing translation."""
        return self.data.get(language, {}).get(key)

    def missing(self) -> dict[str, list[str]]:
        """Keys absent from each language (keys are already sorted)."""
        return {
            lang: [k for k in self.keys if k not in self.data.get(lang, {})]
            for lang in self.languages
        }

    def progress(self) -> Progress:
        total = len(self.keys) * len(self.languages)
        completed = sum(
            1
            for lang in self.languages
            for key in self.keys
            if (self.value(lang, key) or "").strip()
        )
        percentage = round(completed * 100 / total) if total else 0
        return Progress(completed=completed, total=total, percentage=percentage)

    def reordered(self, order: Sequence[str]) -> CatalogTable:
        """
        Present languages in ``order``; languages not mentioned keep scan order
        after the ordered ones, and unknown names in ``order`` are ignored.
        """
        known = set(self.languages)
        head = [lang for lang in dict.fromkeys(order) if lang in known]
        tail = [lang for lang in self.languages if lang not in head]
        return CatalogTable(
            languages=head + tail,
            keys=self.keys,
            data=self.data,
            notices=self.notices,
        )


def parse_source(language: str, text: str) -> FlatCatalog:
    """Parse and flatten one raw JSON source."""
    try:
        return flatten(json.loads(text))
    except json.JSONDecodeError as exc:
        raise SourceParseError(language, f"Invalid JSON: {exc}") from exc
    except RecursionError as exc:
        raise SourceParseError(language, "Document is nested too deeply") from exc


def _collect(
    loaders: Iterable[tuple[str, Callable[[], FlatCatalog]]],
    *,
    keep_failed: bool,
) -> CatalogTable:
    languages: list[str] = []
    data: dict[str, FlatCatalog] = {}
    notices: list[Notice] = []
    all_keys: set[str] = set()

    for lang, load in loaders:
        try:
            flat = load()
        except SourceError as exc:
            logger.warning("Skipping %s: %s", exc.language, exc.message)
            notices.append(exc.to_notice())
            if keep_failed:
                languages.append(lang)
                data[lang] = {}
            continue

        languages.append(lang)
        data[lang] = flat
        all_keys.update(flat)

    # Plain str ordering is by code point, not locale-aware.
    return CatalogTable(
        languages=languages,
        keys=sorted(all_keys),
        data=data,
        notices=notices,
    )


def aggregate(sources: Iterable[tuple[str, str]], *, keep_failed: bool = True) -> CatalogTable:
    """
    Build a table from ``(language, raw JSON text)`` pairs, in the given order.

    A source that fails to parse is reported as a notice. With ``keep_failed``
    the language stays listed with an empty catalog; otherwise it is dropped.
    """
    return _collect(
        ((lang, partial(parse_source, lang, text)) for lang, text in sources),
        keep_failed=keep_failed,
    )


def scan(layout: CatalogLayout) -> CatalogTable:
    """Read every language the layout knows about and aggregate them."""
    languages = layout.languages()
    logger.debug("Scanning %s catalog at %s: %s", layout.structure, layout.root, languages)
    return _collect(
        ((lang, partial(layout.load_flat, lang)) for lang in languages),
        keep_failed=layout.structure == "flat",
    )


def scan_flat(folder: Path, indent: int = 2) -> CatalogTable:
    """Scan ``<folder>/<lang>.json`` files; unreadable languages stay listed."""
    return scan(FlatLayout(folder, indent=indent))


def scan_nested(folder: Path, file_name: str, indent: int = 2) -> CatalogTable:
    """
    Scan ``<folder>/<lang>/<file_name>``.

    Languages without the file are skipped silently; languages whose file
    cannot be read or parsed are reported and dropped.
    """
    return scan(NestedLayout(folder, file_name, indent=indent))
