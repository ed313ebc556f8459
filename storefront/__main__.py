"""
Run the API server:

  python -m storefront

Binds to HOST:PORT from settings (default 127.0.0.1:3000).
"""

import sys

import uvicorn

from storefront.core.config import get_settings
from storefront.core.database import init_db
from storefront.core.logging import configure_logging


def main() -> int:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    if settings.DATABASE_URL.startswith("sqlite"):
        init_db()
    uvicorn.run(
        "storefront.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
