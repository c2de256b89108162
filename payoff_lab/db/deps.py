from __future__ import annotations

from collections.abc import Generator

from fastapi import Header, Request
from sqlalchemy.orm import Session


MAX_USER_ID_LEN = 64


def get_db(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency yielding a run-store session."""
    db = request.app.state.db.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_user_id(x_user_id: str | None = Header(default=None, alias="X-User-Id")) -> str | None:
    """Optional scoping of recorded runs to a browser profile."""
    user_id = (x_user_id or "").strip()
    if not user_id or len(user_id) > MAX_USER_ID_LEN:
        return None
    return user_id
