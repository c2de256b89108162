from __future__ import annotations

import logging
import os

from fastapi import FastAPI

from payoff_lab.api.router import api_router
from payoff_lab.db.session import Database


DEFAULT_LOG_LEVEL = "INFO"


def _configure_logging() -> None:
    level = os.getenv("PAYOFF_LAB_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("payoff_lab").setLevel(level)


def create_app(database_url: str | None = None) -> FastAPI:
    _configure_logging()
    app = FastAPI(title="Payoff Lab API", version="1.0.0")

    # Run store (SQLite by default)
    app.state.db = Database.from_url(database_url)
    app.state.db.create_tables()

    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
