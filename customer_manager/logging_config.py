"""
Logging setup
=============

Purpose:
- Configure the root logger once and provide a request-logging middleware for the
  FastAPI app.

Notes:
- `setup_logging` is idempotent; repeated `create_app` calls (tests) do not stack handlers.
"""

import logging
import time
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("customer_manager.http")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """
    Attach a console handler (and optionally a file handler) to the root logger.

    Parameters:
    - level: `str` logging level name, case insensitive.
    - logfile: `str | None` optional path of a log file.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(logfile, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log `METHOD path -> status (ms)` for every request."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response
