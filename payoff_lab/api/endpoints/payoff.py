from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from payoff_lab.db.deps import get_db, get_user_id
from payoff_lab.db.repository import create_run
from payoff_lab.errors import DegenerateSweep
from payoff_lab.meta.catalog import DEFAULT_QUOTES
from payoff_lab.schemas.payoff import (
    AnalyzeRequest,
    AnalyzeResponse,
    EditRequest,
    EditResponse,
    EditResult,
    PayoffAnalysis,
    QuotesRequest,
    QuotesResponse,
    RemoveRequest,
    SeedResponse,
)
from payoff_lab.schemas.positions import OptionQuote
from payoff_lab.services.analysis import analyze
from payoff_lab.services.book import PortfolioBook


router = APIRouter()


def _recompute(book: PortfolioBook, req: AnalyzeRequest) -> PayoffAnalysis:
    try:
        return book.recompute(req.sweep, epsilon=req.epsilon)
    except DegenerateSweep as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _edit_response(book: PortfolioBook, result: EditResult, req: AnalyzeRequest) -> EditResponse:
    return EditResponse(result=result, positions=book.positions, analysis=_recompute(book, req))


@router.get("/seed", response_model=SeedResponse)
def api_payoff_seed() -> SeedResponse:
    """Default legs for a fresh page (premium = bid/ask mid)."""
    quotes = [OptionQuote.model_validate(q) for q in DEFAULT_QUOTES]
    return SeedResponse(quotes=quotes, positions=[q.to_position() for q in quotes])


@router.post("/quotes", response_model=QuotesResponse)
def api_payoff_quotes(req: QuotesRequest) -> QuotesResponse:
    return QuotesResponse(positions=PortfolioBook.from_quotes(req.quotes).positions)


@router.post("/analyze", response_model=AnalyzeResponse)
def api_payoff_analyze(
    req: AnalyzeRequest,
    db: Session = Depends(get_db),
    user_id: str | None = Depends(get_user_id),
) -> AnalyzeResponse:
    try:
        analysis = analyze(req.positions, sweep=req.sweep, epsilon=req.epsilon)
    except DegenerateSweep as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    run_id = create_run(
        db,
        run_type="payoff.analyze",
        input_payload=req.model_dump(),
        output_payload=analysis.model_dump(),
        user_id=user_id,
    )
    return AnalyzeResponse(run_id=run_id, analysis=analysis)


@router.post("/edit", response_model=EditResponse)
def api_payoff_edit(req: EditRequest) -> EditResponse:
    """Apply one field edit, then recompute.

    A rejected edit is reported in `result` and the legs come back unchanged.
    """
    book = PortfolioBook(req.positions)
    result = book.set_field(req.index, req.field, req.value)
    return _edit_response(book, result, req)


@router.post("/remove", response_model=EditResponse)
def api_payoff_remove(req: RemoveRequest) -> EditResponse:
    book = PortfolioBook(req.positions)
    result = book.remove(req.index)
    return _edit_response(book, result, req)
