from __future__ import annotations

from fastapi import APIRouter, Depends

from locale_table.core.errors import CatalogError
from locale_table.schemas.table import CellUpdate, TableRead
from locale_table.services.session import EditorSession, get_editor_session

from .table import _render_table, _to_http

router = APIRouter(prefix="/api/cells", tags=["cells"])


@router.put("", response_model=TableRead)
async def set_value(
    payload: CellUpdate,
    session: EditorSession = Depends(get_editor_session),
) -> TableRead:
    """
    Save one cell. Creates the key in that language if it was missing.

    A read/parse failure of the language file is returned as a notice and the
    file is left untouched.
    """
    try:
        result = session.mutator().set_value(payload.language, payload.key, payload.value)
    except CatalogError as exc:
        raise _to_http(exc) from exc
    return _render_table(session, result.notices)
