"""Run the editor API: ``python -m locale_table``."""

from __future__ import annotations

import uvicorn

from locale_table.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "locale_table.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
