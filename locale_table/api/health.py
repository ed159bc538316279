from fastapi import APIRouter, Depends

from locale_table.services.session import EditorSession, get_editor_session

# Health router kept prefix-free to expose exactly /health and /health/ready
router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness probe")
def health() -> dict:
    """Return a simple OK payload to indicate the app is alive."""
    return {"status": "ok"}


@router.get("/health/ready", summary="Readiness probe")
def ready(session: EditorSession = Depends(get_editor_session)) -> dict:
    """
    The service is ready even before a folder is picked; 'catalog' tells the
    host whether it still has to choose one.
    """
    folder = session.folder
    return {
        "status": "ready",
        "ready": True,
        "catalog": folder is not None and folder.is_dir(),
    }
