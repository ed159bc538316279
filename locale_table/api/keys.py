from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from locale_table.core.errors import CatalogError
from locale_table.schemas.table import CopyTextRead, KeyCopy, KeyCreate, TableRead
from locale_table.services.session import EditorSession, get_editor_session
from locale_table.services.snippets import render_copy_text

from .table import _render_table, _to_http

router = APIRouter(prefix="/api/keys", tags=["keys"])


@router.post("", response_model=TableRead, status_code=status.HTTP_201_CREATED)
async def add_key(
    payload: KeyCreate,
    session: EditorSession = Depends(get_editor_session),
) -> TableRead:
    """Add ``key`` with an empty value to every language that does not have it."""
    try:
        result = session.mutator().add_key(payload.key)
    except CatalogError as exc:
        raise _to_http(exc) from exc
    return _render_table(session, result.notices)


@router.delete("", response_model=TableRead)
async def delete_key(
    key: str = Query(..., min_length=1, description="Key path to remove from all languages"),
    session: EditorSession = Depends(get_editor_session),
) -> TableRead:
    try:
        result = session.mutator().delete_key(key)
    except CatalogError as exc:
        raise _to_http(exc) from exc
    return _render_table(session, result.notices)


@router.post("/duplicate", response_model=TableRead)
async def duplicate_key(
    payload: KeyCopy,
    session: EditorSession = Depends(get_editor_session),
) -> TableRead:
    """
    Copy ``original_key``'s value to ``new_key`` in every language that has it.

    Languages without the original key are left alone, so ``new_key`` shows
    up as missing there.
    """
    try:
        result = session.mutator().duplicate_key(payload.original_key, payload.new_key)
    except CatalogError as exc:
        raise _to_http(exc) from exc
    return _render_table(session, result.notices)


@router.post("/rename", response_model=TableRead)
async def rename_key(
    payload: KeyCopy,
    session: EditorSession = Depends(get_editor_session),
) -> TableRead:
    try:
        result = session.mutator().rename_key(payload.original_key, payload.new_key)
    except CatalogError as exc:
        raise _to_http(exc) from exc
    return _render_table(session, result.notices)


@router.get("/copy", response_model=CopyTextRead)
async def copy_key(
    key: str = Query(..., min_length=1),
    use_template: bool | None = Query(
        None, description="Wrap the key in the session template; defaults to the copy mode"
    ),
    session: EditorSession = Depends(get_editor_session),
) -> CopyTextRead:
    """Text the host should place on the clipboard for ``key``."""
    wrap = use_template if use_template is not None else session.copy_mode == "template"
    text = render_copy_text(key, use_template=wrap, template=session.copy_template)
    return CopyTextRead(key=key, text=text, use_template=wrap)
