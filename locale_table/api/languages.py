from __future__ import annotations

from fastapi import APIRouter, Depends, status

from locale_table.core.errors import CatalogError
from locale_table.schemas.table import LanguageCreate, LanguageRename, TableRead
from locale_table.services.session import EditorSession, get_editor_session

from .table import _render_table, _to_http

router = APIRouter(prefix="/api/languages", tags=["languages"])


@router.post("", response_model=TableRead, status_code=status.HTTP_201_CREATED)
async def add_language(
    payload: LanguageCreate,
    session: EditorSession = Depends(get_editor_session),
) -> TableRead:
    """
    Create an empty catalog for a new language.

    Flat structure: ``<lang>.json``; nested structure: ``<lang>/<selected file>``.
    Existing language -> 409.
    """
    try:
        result = session.mutator().add_language(payload.language)
    except CatalogError as exc:
        raise _to_http(exc) from exc
    return _render_table(session, result.notices)


@router.patch("/{language}", response_model=TableRead)
async def rename_language(
    language: str,
    payload: LanguageRename,
    session: EditorSession = Depends(get_editor_session),
) -> TableRead:
    """Rename a language's file (flat) or folder (nested); keys are untouched."""
    try:
        result = session.mutator().rename_language(language, payload.new_name)
    except CatalogError as exc:
        raise _to_http(exc) from exc
    if result.changed:
        session.rename_in_order(language, result.changed[0])
    return _render_table(session, result.notices)
