# locale_table/schemas/table.py
from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from locale_table.core.config import CopyMode, StructureType
from locale_table.core.errors import NoticeKind


class NoticeRead(BaseModel):
    """Per-language problem surfaced to the user."""

    language: str
    kind: NoticeKind
    message: str

    model_config = ConfigDict(from_attributes=True)


class ProgressRead(BaseModel):
    completed: int
    total: int
    percentage: int

    model_config = ConfigDict(from_attributes=True)


class TableRead(BaseModel):
    """Full table pushed back to the UI after every command."""

    structure: StructureType
    selected_file: str | None = None
    languages: list[str]
    keys: list[str]
    # language -> {key path: value}; absent keys are missing translations
    data: dict[str, dict[str, str]]
    missing: dict[str, list[str]] = Field(default_factory=dict)
    progress: ProgressRead
    notices: list[NoticeRead] = Field(default_factory=list)


# --- command payloads ---


class LanguageCreate(BaseModel):
    language: str = Field(..., min_length=1, max_length=100)


class LanguageRename(BaseModel):
    new_name: str = Field(..., min_length=1, max_length=100)


class KeyCreate(BaseModel):
    key: str = Field(..., min_length=1)


class KeyCopy(BaseModel):
    """Payload for duplicate/rename: ``original_key`` -> ``new_key``."""

    original_key: str = Field(..., min_length=1)
    new_key: str = Field(..., min_length=1)


class CellUpdate(BaseModel):
    language: str = Field(..., min_length=1)
    key: str = Field(..., min_length=1)
    value: str = ""


class CopyTextRead(BaseModel):
    key: str
    text: str
    use_template: bool


# --- session ---


class SessionRead(BaseModel):
    folder: Path | None = None
    structure: StructureType
    selected_file: str | None = None
    language_order: list[str] = Field(default_factory=list)
    copy_template: str
    copy_mode: CopyMode
    templates: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(from_attributes=True)


class SessionUpdate(BaseModel):
    """Partial update; only fields that are set are applied."""

    folder: Path | None = None
    structure: StructureType | None = None
    selected_file: str | None = None
    language_order: list[str] | None = None
    copy_template: str | None = None
    copy_mode: CopyMode | None = None
