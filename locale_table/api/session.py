from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from locale_table.core.errors import CatalogError
from locale_table.schemas.table import SessionRead, SessionUpdate
from locale_table.services.session import (
    EditorSession,
    get_editor_session,
    validate_file_name,
)

from .table import _to_http

router = APIRouter(prefix="/api/session", tags=["session"])


@router.get("", response_model=SessionRead)
async def read_session(session: EditorSession = Depends(get_editor_session)) -> SessionRead:
    return SessionRead.model_validate(session)


@router.patch("", response_model=SessionRead)
async def update_session(
    payload: SessionUpdate,
    session: EditorSession = Depends(get_editor_session),
) -> SessionRead:
    """
    Apply the host's choices: catalog folder, structure, nested file,
    column order and copy settings. Only fields present in the body change.
    """
    changes: dict[str, Any] = payload.model_dump(exclude_unset=True)

    folder = changes.get("folder")
    if folder is not None and not folder.is_dir():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Folder not found: {folder}",
        )

    if changes.get("selected_file") is not None:
        try:
            changes["selected_file"] = validate_file_name(changes["selected_file"])
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    for name, value in changes.items():
        if value is None and name not in ("folder", "selected_file"):
            continue
        setattr(session, name, value)

    return SessionRead.model_validate(session)


@router.get("/files")
async def list_files(session: EditorSession = Depends(get_editor_session)) -> dict[str, Any]:
    """JSON file names that can be selected in nested structure."""
    try:
        files = session.available_files()
    except CatalogError as exc:
        raise _to_http(exc) from exc
    return {"structure": session.structure, "files": files}
