from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from payoff_lab.schemas.positions import OptionQuote, Position


DEFAULT_PRICE_MIN = 0
DEFAULT_PRICE_MAX = 150
DEFAULT_STEP = 1

MAX_PRICE = 100_000
MAX_SWEEP_POINTS = 2001

# Absolute P/L band (currency units) treated as "break-even" on the integer sweep.
BREAK_EVEN_EPSILON = 1.0

X_AXIS_TITLE = "Price of underlying at expiry"
Y_AXIS_TITLE = "Profit/Loss"
SERIES_LABEL = "Profit/Loss"


# -----------
# Core values
# -----------


class SweepConfig(BaseModel):
    price_min: int = Field(default=DEFAULT_PRICE_MIN, ge=0, le=MAX_PRICE, description="Lower bound of the sweep (inclusive)")
    price_max: int = Field(default=DEFAULT_PRICE_MAX, le=MAX_PRICE, description="Upper bound of the sweep (inclusive)")
    step: int = Field(default=DEFAULT_STEP, le=MAX_PRICE, description="Sweep granularity")

    @model_validator(mode="after")
    def _validate_size(self) -> "SweepConfig":
        # Ordering and step sign are checked by sweep_prices (DegenerateSweep).
        if self.step > 0 and self.price_max >= self.price_min:
            n = (self.price_max - self.price_min) // self.step + 1
            if n > MAX_SWEEP_POINTS:
                raise ValueError(f"sweep too large ({n} points, max {MAX_SWEEP_POINTS})")
        return self


class CurvePoint(BaseModel):
    price: int
    pnl: float


class SampledCurve(BaseModel):
    points: list[CurvePoint] = Field(default_factory=list)
    leg_count: int = Field(default=0, ge=0, description="Number of legs that produced the curve")
    sweep: SweepConfig = Field(default_factory=SweepConfig)

    @property
    def prices(self) -> list[int]:
        return [p.price for p in self.points]

    @property
    def values(self) -> list[float]:
        return [p.pnl for p in self.points]


class Metrics(BaseModel):
    """Summary of a sampled curve.

    status == "undefined" means there was nothing to measure (no legs or no samples);
    the extrema are then None rather than +/- infinity.
    """

    status: Literal["ok", "undefined"]
    max_profit: float | None = None
    max_loss: float | None = None
    break_even_points: list[int] = Field(default_factory=list)


# ------------------
# Presentation seam
# ------------------


class ChartPoint(BaseModel):
    x: int
    y: float
    tooltip: str


class ChartSeries(BaseModel):
    label: str = SERIES_LABEL
    labels: list[int]
    values: list[float]
    points: list[ChartPoint]
    x_axis_title: str = X_AXIS_TITLE
    y_axis_title: str = Y_AXIS_TITLE

    def tooltip(self, index: int) -> str:
        return self.points[index].tooltip


class MetricsDisplay(BaseModel):
    max_profit: str
    max_loss: str
    break_even_points: str


class PayoffAnalysis(BaseModel):
    positions: list[Position]
    curve: SampledCurve
    metrics: Metrics
    chart: ChartSeries
    display: MetricsDisplay


class EditResult(BaseModel):
    status: Literal["ok", "error"]
    action: Literal["edit", "remove", "add"]
    index: int
    field: str | None = None
    position: Position | None = None
    error: str | None = None


# -----------------
# API request/response
# -----------------


class SeedResponse(BaseModel):
    quotes: list[OptionQuote]
    positions: list[Position]


class QuotesRequest(BaseModel):
    quotes: list[OptionQuote] = Field(default_factory=list, max_length=50)


class QuotesResponse(BaseModel):
    positions: list[Position]


class AnalyzeRequest(BaseModel):
    positions: list[Position] = Field(default_factory=list, max_length=50)
    sweep: SweepConfig = Field(default_factory=SweepConfig)
    epsilon: float = Field(default=BREAK_EVEN_EPSILON, gt=0, description="Break-even band (absolute P/L)")


class AnalyzeResponse(BaseModel):
    run_id: str
    analysis: PayoffAnalysis


class EditRequest(AnalyzeRequest):
    index: int
    field: str
    value: Any = None


class RemoveRequest(AnalyzeRequest):
    index: int


class EditResponse(BaseModel):
    result: EditResult
    positions: list[Position]
    analysis: PayoffAnalysis
