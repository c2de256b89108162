from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


OptionKind = Literal["call", "put"]
Direction = Literal["long", "short"]


def _lower(v: Any) -> Any:
    return v.strip().lower() if isinstance(v, str) else v


class Position(BaseModel):
    """One option leg, valued at expiration."""

    model_config = ConfigDict(frozen=True)

    kind: OptionKind = Field(description="Option type")
    strike: float = Field(gt=0, allow_inf_nan=False, description="Strike price")
    premium: float = Field(
        allow_inf_nan=False,
        description="Net premium per unit (paid when long, received when short). Not range-checked.",
    )
    direction: Direction = Field(default="long", description="long = holder, short = writer")

    @field_validator("kind", "direction", mode="before")
    @classmethod
    def _normalize_enum(cls, v: Any) -> Any:
        return _lower(v)

    @field_validator("strike", "premium", mode="before")
    @classmethod
    def _reject_bool(cls, v: Any) -> Any:
        # Lax mode would turn True/False into 1.0/0.0; numeric strings still pass through.
        if isinstance(v, bool):
            raise ValueError("must be a number, not a boolean")
        return v


class OptionQuote(BaseModel):
    """A raw market quote used to seed a leg."""

    strike_price: float = Field(gt=0, description="Strike price")
    type: OptionKind = Field(description="Option type (Call/Put, case-insensitive)")
    bid: float = Field(ge=0, description="Bid price")
    ask: float = Field(ge=0, description="Ask price")
    long_short: Direction = Field(default="long")
    expiration_date: datetime | None = Field(default=None, description="Informational only")

    @field_validator("type", "long_short", mode="before")
    @classmethod
    def _normalize_enum(cls, v: Any) -> Any:
        return _lower(v)

    @property
    def mid(self) -> float:
        return (self.bid + self.ask) / 2

    def to_position(self) -> Position:
        return Position(kind=self.type, strike=self.strike_price, premium=self.mid, direction=self.long_short)
