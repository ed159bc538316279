from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from locale_table.core.errors import (
    CatalogError,
    LanguageExistsError,
    LanguageNotFoundError,
    Notice,
)
from locale_table.schemas.table import NoticeRead, ProgressRead, TableRead
from locale_table.services.session import EditorSession, get_editor_session
from locale_table.utils.yaml_io import to_yaml

router = APIRouter(prefix="/api/table", tags=["table"])


def _to_http(exc: CatalogError) -> HTTPException:
    """Map command-level catalog errors to HTTP errors."""
    if isinstance(exc, LanguageNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, LanguageExistsError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    # Invalid key/language ids and an unconfigured session
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


def _render_table(session: EditorSession, notices: Iterable[Notice] = ()) -> TableRead:
    """
    Re-scan the catalog and build the response pushed back to the UI.

    ``notices`` are problems from the command that ran before the scan; the
    scan's own notices follow them.
    """
    try:
        table = session.scan()
    except CatalogError as exc:
        raise _to_http(exc) from exc

    all_notices = [*notices, *table.notices]
    return TableRead(
        structure=session.structure,
        selected_file=session.selected_file if session.structure == "nested" else None,
        languages=table.languages,
        keys=table.keys,
        data={lang: table.data.get(lang, {}) for lang in table.languages},
        missing=table.missing(),
        progress=ProgressRead.model_validate(table.progress()),
        notices=[NoticeRead.model_validate(n) for n in all_notices],
    )


@router.get("", response_model=TableRead)
async def get_table(session: EditorSession = Depends(get_editor_session)) -> TableRead:
    return _render_table(session)


@router.post("/refresh", response_model=TableRead)
async def refresh_table(session: EditorSession = Depends(get_editor_session)) -> TableRead:
    """Explicit refresh command; identical to GET since every scan reads from disk."""
    return _render_table(session)


@router.get("/export")
async def export_table(
    fmt: str = Query("json"),
    download: int = Query(0, ge=0, le=1),
    indent: int | None = Query(None, ge=0),
    session: EditorSession = Depends(get_editor_session),
) -> Response:
    """
    Export the current table as JSON or YAML.

    The export carries languages, sorted keys and per-key rows
    (``{key: {lang: value}}``, missing cells omitted).
    """
    if fmt not in ("json", "yaml"):
        raise HTTPException(status_code=400, detail=f"Unsupported format '{fmt}'")

    table = _render_table(session)
    envelope: dict[str, Any] = {
        "structure": table.structure,
        "selected_file": table.selected_file,
        "languages": table.languages,
        "keys": table.keys,
        "rows": {
            key: {lang: table.data[lang][key] for lang in table.languages if key in table.data[lang]}
            for key in table.keys
        },
    }

    headers: dict[str, str] = {}
    if fmt == "yaml":
        if download:
            headers["Content-Disposition"] = 'attachment; filename="translations.yaml"'
        return Response(content=to_yaml(envelope), media_type="application/x-yaml", headers=headers)

    if download:
        headers["Content-Disposition"] = 'attachment; filename="translations.json"'
    body = json.dumps(envelope, ensure_ascii=False, indent=indent)
    return Response(content=body, media_type="application/json", headers=headers)
