from __future__ import annotations

import json

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from payoff_lab.db.deps import get_db, get_user_id
from payoff_lab.db.repository import get_run, list_runs
from payoff_lab.schemas.runs import RunDetailResponse, RunsListResponse, RunSummary
from payoff_lab.services.reports import build_analysis_report_pdf

router = APIRouter()


@router.get("", response_model=RunsListResponse)
def api_list_runs(
    limit: int = 20,
    offset: int = 0,
    run_type: str | None = None,
    db: Session = Depends(get_db),
    user_id: str | None = Depends(get_user_id),
) -> RunsListResponse:
    limit = max(1, min(limit, 200))
    offset = max(0, offset)

    rows = list_runs(db, limit=limit, offset=offset, run_type=run_type, user_id=user_id)
    items = [RunSummary(run_id=r.run_id, run_type=r.run_type, created_at=r.created_at) for r in rows]
    return RunsListResponse(items=items, limit=limit, offset=offset, run_type=run_type)


@router.get("/{run_id}", response_model=RunDetailResponse)
def api_get_run(
    run_id: str,
    db: Session = Depends(get_db),
    user_id: str | None = Depends(get_user_id),
) -> RunDetailResponse:
    rec = get_run(db, run_id, user_id=user_id)
    if not rec:
        raise HTTPException(status_code=404, detail="Run not found")

    return RunDetailResponse(
        run_id=rec.run_id,
        run_type=rec.run_type,
        created_at=rec.created_at,
        input=json.loads(rec.input_json),
        output=json.loads(rec.output_json),
    )


@router.get("/{run_id}/report.pdf")
def api_get_run_report_pdf(
    run_id: str,
    db: Session = Depends(get_db),
    user_id: str | None = Depends(get_user_id),
) -> Response:
    """PDF of a recorded analysis: legs, metric cards and the sampled curve."""
    rec = get_run(db, run_id, user_id=user_id)
    if not rec:
        raise HTTPException(status_code=404, detail="Run not found")

    input_payload = json.loads(rec.input_json)
    output_payload = json.loads(rec.output_json)
    sweep = input_payload.get("sweep") or {}

    run_meta = {
        "run_id": rec.run_id,
        "run_type": rec.run_type,
        "created_at": rec.created_at.isoformat() if rec.created_at else "",
        "user_id": rec.user_id or "",
        "sweep": f"[{sweep.get('price_min', '')}, {sweep.get('price_max', '')}] step {sweep.get('step', '')}",
        "break_even_band": input_payload.get("epsilon", ""),
    }

    pdf_bytes = build_analysis_report_pdf(
        title=f"Payoff report – {rec.run_type}",
        run_meta=run_meta,
        positions=list(input_payload.get("positions") or []),
        display=dict(output_payload.get("display") or {}),
        curve_points=list((output_payload.get("curve") or {}).get("points") or []),
        notes=[
            "Profit/loss at expiration only; no time value.",
            "Break-even points are sweep prices whose |P/L| is below the band, not exact roots.",
        ],
    )

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="run_{run_id}.pdf"'},
    )
