from __future__ import annotations

from fastapi import APIRouter

from payoff_lab.meta.catalog import CATALOG


router = APIRouter()


@router.get("/payoff")
def get_payoff_catalog() -> dict[str, object]:
    """Static metadata for the leg editor, chart captions and metric cards."""
    return CATALOG
