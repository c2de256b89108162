from __future__ import annotations

import json
import logging
import uuid
from datetime import date, datetime
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Session

from payoff_lab.db.models import RunRecord


logger = logging.getLogger(__name__)


def _to_jsonable(x: Any) -> Any:  # noqa: ANN401
    if x is None or isinstance(x, (str, int, float, bool)):
        return x
    if isinstance(x, (date, datetime)):
        return x.isoformat()

    md = getattr(x, "model_dump", None)
    if callable(md):
        return _to_jsonable(md())

    if isinstance(x, dict):
        return {str(k): _to_jsonable(v) for k, v in x.items()}
    if isinstance(x, (list, tuple, set)):
        return [_to_jsonable(v) for v in x]
    return str(x)


def _dumps(payload: Any) -> str:
    """Serialize a payload (possibly holding pydantic models / datetimes) for storage."""
    return json.dumps(_to_jsonable(payload), ensure_ascii=False, separators=(",", ":"))


def create_run(
    db: Session,
    *,
    run_type: str,
    input_payload: dict[str, Any],
    output_payload: dict[str, Any],
    run_id: str | None = None,
    user_id: str | None = None,
) -> str:
    rid = run_id or str(uuid.uuid4())
    rec = RunRecord(
        run_id=rid,
        run_type=run_type,
        user_id=user_id,
        input_json=_dumps(input_payload),
        output_json=_dumps(output_payload),
    )
    db.add(rec)
    db.commit()
    logger.debug("Recorded %s run %s", run_type, rid)
    return rid


def list_runs(
    db: Session,
    *,
    limit: int = 20,
    offset: int = 0,
    run_type: str | None = None,
    user_id: str | None = None,
) -> list[RunRecord]:
    q = db.query(RunRecord)
    if run_type:
        q = q.filter(RunRecord.run_type == run_type)
    if user_id is not None:
        # Unscoped runs stay visible to every profile.
        q = q.filter(or_(RunRecord.user_id == user_id, RunRecord.user_id.is_(None)))
    q = q.order_by(RunRecord.created_at.desc(), RunRecord.id.desc())
    return q.offset(offset).limit(limit).all()


def get_run(db: Session, run_id: str, *, user_id: str | None = None) -> RunRecord | None:
    q = db.query(RunRecord).filter(RunRecord.run_id == run_id)
    if user_id is not None:
        q = q.filter(or_(RunRecord.user_id == user_id, RunRecord.user_id.is_(None)))
    return q.first()
