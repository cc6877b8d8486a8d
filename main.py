"""
Uvicorn Entrypoint
==================

Purpose:
- Run the Customer Manager API with host/port taken from the environment (or `.env`).

Usage:
- `pip install -e .`
- `python main.py`, then open http://localhost:8000/docs
"""

import uvicorn

from customer_manager.config import Settings


def main() -> None:
    """Serve `customer_manager.main:app` with uvicorn."""
    settings = Settings.from_env()
    uvicorn.run(
        "customer_manager.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
