# locale_table/services/session.py
"""
Editor session: the folder, structure and file currently being edited.

One session lives on ``app.state.session`` and is handed to route handlers
through the ``get_editor_session`` dependency.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from starlette.requests import Request

from locale_table.core.config import (
    DEFAULT_COPY_TEMPLATE,
    CopyMode,
    Settings,
    StructureType,
)
from locale_table.core.errors import SessionNotConfiguredError
from locale_table.services.aggregator import CatalogTable, scan
from locale_table.services.layouts import (
    CatalogLayout,
    FlatLayout,
    NestedLayout,
    list_nested_files,
)
from locale_table.services.mutator import CellMutator


def validate_file_name(file_name: str) -> str:
    name = (file_name or "").strip()
    if not name or "/" in name or "\\" in name or ".." in name:
        raise ValueError(f"Invalid file name '{file_name}'")
    return name


@dataclass
class EditorSession:
    folder: Path | None = None
    structure: StructureType = "flat"
    selected_file: str | None = None
    # Preferred column order; languages not listed follow in scan order.
    language_order: list[str] = field(default_factory=list)
    copy_template: str = DEFAULT_COPY_TEMPLATE
    copy_mode: CopyMode = "plain"
    templates: dict[str, str] = field(default_factory=dict)
    indent: int = 2

    @classmethod
    def from_settings(cls, settings: Settings) -> EditorSession:
        return cls(
            folder=settings.CATALOG_DIR,
            structure=settings.STRUCTURE,
            selected_file=settings.SELECTED_FILE,
            copy_template=settings.COPY_TEMPLATE,
            copy_mode=settings.DEFAULT_COPY_MODE,
            templates=dict(settings.COPY_TEMPLATES),
            indent=settings.JSON_INDENT,
        )

    def layout(self) -> CatalogLayout:
        if self.folder is None:
            raise SessionNotConfiguredError("No catalog folder selected")
        if self.structure == "nested":
            if not self.selected_file:
                raise SessionNotConfiguredError("No file selected for nested structure")
            return NestedLayout(self.folder, self.selected_file, indent=self.indent)
        return FlatLayout(self.folder, indent=self.indent)

    def scan(self) -> CatalogTable:
        return scan(self.layout()).reordered(self.language_order)

    def mutator(self) -> CellMutator:
        return CellMutator(self.layout())

    def available_files(self) -> list[str]:
        """JSON files selectable in nested mode (empty in flat mode)."""
        if self.folder is None:
            raise SessionNotConfiguredError("No catalog folder selected")
        if self.structure != "nested":
            return []
        return list_nested_files(self.folder)

    def rename_in_order(self, old: str, new: str) -> None:
        self.language_order = [new if lang == old else lang for lang in self.language_order]


def get_editor_session(request: Request) -> EditorSession:
    """
    Retrieve the editor session from app.state.

    create_app() installs one; a bare app gets an empty session lazily.
    """
    session = getattr(request.app.state, "session", None)
    if session is None:
        session = EditorSession()
        request.app.state.session = session
    return session
