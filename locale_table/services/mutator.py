# locale_table/services/mutator.py
"""
Table commands applied to the JSON sources.

Every command is a full read-modify-write: re-read the language document from
disk, flatten it, change the flat catalog, unflatten and overwrite the file.
Multi-language commands are best-effort: a failure for one language is turned
into a notice and the remaining languages are still processed.

Keys written by a command may not use an array index above MAX_ARRAY_INDEX.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from locale_table.core.codec import FlatCatalog, is_array_slot_held
from locale_table.core.errors import InvalidKeyError, Notice, SourceError
from locale_table.core.keypath import MAX_ARRAY_INDEX, KeyPath
from locale_table.services.layouts import CatalogLayout, validate_language_id

logger = logging.getLogger(__name__)

# Applies an edit in place; returns False when nothing changed (no write).
Change = Callable[[FlatCatalog], bool]


@dataclass
class MutationResult:
    changed: list[str] = field(default_factory=list)
    notices: list[Notice] = field(default_factory=list)


def _require_key(key: str, what: str = "Key", *, new: bool = False) -> str:
    if not key or not key.strip():
        raise InvalidKeyError(f"{what} must not be empty")
    if new and KeyPath.parse(key).max_index() > MAX_ARRAY_INDEX:
        raise InvalidKeyError(f"{what} uses an array index above {MAX_ARRAY_INDEX}")
    return key


class CellMutator:
    """Read-modify-write operations for one catalog layout."""

    def __init__(self, layout: CatalogLayout) -> None:
        self.layout = layout

    # --- helpers ---

    def _edit(self, language: str, change: Change, result: MutationResult) -> None:
        try:
            flat = self.layout.load_flat(language)
            if not change(flat):
                return
            self.layout.save_flat(language, flat)
        except SourceError as exc:
            logger.warning("Edit failed for %s: %s", exc.language, exc.message)
            result.notices.append(exc.to_notice())
            return
        result.changed.append(language)

    def _edit_all(self, change: Change) -> MutationResult:
        result = MutationResult()
        for language in self.layout.languages():
            self._edit(language, change, result)
        return result

    # --- cell / key commands ---

    def set_value(self, language: str, key: str, value: str) -> MutationResult:
        lang = validate_language_id(language)
        _require_key(key, new=True)

        def change(flat: FlatCatalog) -> bool:
            flat[key] = value
            return True

        result = MutationResult()
        self._edit(lang, change, result)
        logger.info("Set %s[%s] (%s)", lang, key, "ok" if result.changed else "failed")
        return result

    def add_key(self, key: str) -> MutationResult:
        _require_key(key, new=True)

        def change(flat: FlatCatalog) -> bool:
            if key in flat:
                return False
            flat[key] = ""
            return True

        result = self._edit_all(change)
        logger.info("Added key %r to %s", key, result.changed)
        return result

    def delete_key(self, key: str) -> MutationResult:
        """
        Remove ``key`` from every language that has it.

        An array element followed by later items is blanked to "" instead:
        the later items keep their indices and the array cannot have a gap.
        """
        _require_key(key)

        def change(flat: FlatCatalog) -> bool:
            if key not in flat:
                return False
            if is_array_slot_held(flat, key):
                if flat[key] == "":
                    return False
                flat[key] = ""
                logger.info("Blanked %r in place; later array items keep their index", key)
                return True
            del flat[key]
            return True

        result = self._edit_all(change)
        logger.info("Deleted key %r from %s", key, result.changed)
        return result

    def duplicate_key(self, source_key: str, new_key: str) -> MutationResult:
        _require_key(source_key, "Original key")
        _require_key(new_key, "New key", new=True)
        if source_key == new_key:
            raise InvalidKeyError("New key must differ from the original key")

        def change(flat: FlatCatalog) -> bool:
            if source_key not in flat:
                return False
            flat[new_key] = flat[source_key]
            return True

        result = self._edit_all(change)
        logger.info("Duplicated %r as %r in %s", source_key, new_key, result.changed)
        return result

    def rename_key(self, old_key: str, new_key: str) -> MutationResult:
        _require_key(old_key, "Original key")
        _require_key(new_key, "New key", new=True)
        if old_key == new_key:
            raise InvalidKeyError("New key must differ from the original key")

        def change(flat: FlatCatalog) -> bool:
            if old_key not in flat:
                return False
            flat[new_key] = flat.pop(old_key)
            return True

        result = self._edit_all(change)
        logger.info("Renamed %r to %r in %s", old_key, new_key, result.changed)
        return result

    # --- language commands ---

    # Not-found / already-exists errors propagate; only I/O failures become notices.

    def add_language(self, language: str) -> MutationResult:
        result = MutationResult()
        try:
            path = self.layout.create(language)
        except SourceError as exc:
            logger.warning("Could not create %s: %s", exc.language, exc.message)
            result.notices.append(exc.to_notice())
            return result
        logger.info("Created language file %s", path)
        result.changed.append(validate_language_id(language))
        return result

    def rename_language(self, old: str, new: str) -> MutationResult:
        result = MutationResult()
        try:
            path = self.layout.rename(old, new)
        except SourceError as exc:
            logger.warning("Could not rename %s: %s", exc.language, exc.message)
            result.notices.append(exc.to_notice())
            return result
        logger.info("Renamed language %s -> %s (%s)", old, new, path)
        result.changed.append(validate_language_id(new))
        return result
