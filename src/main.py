# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Entry point for running the attendance API with uvicorn.

Usage:
    python -m src.main
    uvicorn src.main:app --port 3000
"""

import uvicorn

from src.api import create_app
from src.core.config import get_settings
from src.utils import get_logger

logger = get_logger(__name__)

app = create_app()


def main() -> None:
    """Run the API server."""
    settings = get_settings()
    logger.info(
        "Starting attendance API server",
        host=settings.api.host,
        port=settings.api.port,
        workers=settings.api.workers,
    )
    uvicorn.run(
        "src.main:app",
        host=settings.api.host,
        port=settings.api.port,
        workers=settings.api.workers,
        reload=settings.api.reload,
    )


if __name__ == "__main__":
    main()
