#!/usr/bin/env python3
"""Run script for taskboard."""

import uvicorn

from taskboard.config import settings
from taskboard.logging_setup import setup_logging

if __name__ == "__main__":
    setup_logging(settings.log_level)
    uvicorn.run(
        "taskboard.api.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )
