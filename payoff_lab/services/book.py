from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from payoff_lab.errors import InvalidPosition
from payoff_lab.meta.catalog import DEFAULT_QUOTES
from payoff_lab.schemas.payoff import BREAK_EVEN_EPSILON, EditResult, PayoffAnalysis, SweepConfig
from payoff_lab.schemas.positions import OptionQuote, Position
from payoff_lab.services.analysis import analyze


logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("kind", "strike", "premium", "direction")

# Field names used by the quote feed / older UI builds.
FIELD_ALIASES: dict[str, str] = {"type": "kind", "long_short": "direction"}


def _first_error(exc: ValidationError) -> str:
    errs = exc.errors()
    if not errs:
        return str(exc)
    loc = ".".join(str(x) for x in errs[0].get("loc", ()))
    msg = str(errs[0].get("msg", "invalid value"))
    return f"{loc}: {msg}" if loc else msg


def edit_position(position: Position, field: str, value: Any) -> Position:
    """Return a copy of `position` with one field replaced.

    Raises InvalidPosition if the field is unknown or the new value does not validate.
    """
    name = FIELD_ALIASES.get(field, field)
    if name not in EDITABLE_FIELDS:
        raise InvalidPosition(f"unknown field: {field}")

    data = position.model_dump()
    data[name] = value
    try:
        return Position.model_validate(data)
    except ValidationError as exc:
        raise InvalidPosition(_first_error(exc)) from exc


class PortfolioBook:
    """Caller-owned, ordered list of legs.

    Every mutation is applied in full before the caller asks for `recompute()`;
    rejected edits leave the book untouched.
    """

    def __init__(self, positions: Iterable[Position] | None = None) -> None:
        self._positions: list[Position] = list(positions or [])

    @classmethod
    def from_quotes(cls, quotes: Iterable[OptionQuote | dict[str, Any]]) -> "PortfolioBook":
        legs = [OptionQuote.model_validate(q).to_position() for q in quotes]
        return cls(legs)

    @classmethod
    def seeded(cls) -> "PortfolioBook":
        return cls.from_quotes(DEFAULT_QUOTES)

    @property
    def positions(self) -> list[Position]:
        return list(self._positions)

    def __len__(self) -> int:
        return len(self._positions)

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._positions):
            raise IndexError(f"leg index {index} out of range (0..{len(self._positions) - 1})")

    def add(self, position: Position) -> EditResult:
        self._positions.append(position)
        return EditResult(status="ok", action="add", index=len(self._positions) - 1, position=position)

    def add_quote(self, quote: OptionQuote | dict[str, Any]) -> EditResult:
        return self.add(OptionQuote.model_validate(quote).to_position())

    def set_field(self, index: int, field: str, value: Any) -> EditResult:
        name = FIELD_ALIASES.get(field, field)
        try:
            self._check_index(index)
            updated = edit_position(self._positions[index], name, value)
        except (IndexError, InvalidPosition) as exc:
            logger.info("Rejected edit of leg %s (%s=%r): %s", index, field, value, exc)
            return EditResult(status="error", action="edit", index=index, field=name, error=str(exc))

        self._positions[index] = updated
        return EditResult(status="ok", action="edit", index=index, field=name, position=updated)

    def remove(self, index: int) -> EditResult:
        try:
            self._check_index(index)
        except IndexError as exc:
            logger.info("Rejected removal of leg %s: %s", index, exc)
            return EditResult(status="error", action="remove", index=index, error=str(exc))

        removed = self._positions.pop(index)
        return EditResult(status="ok", action="remove", index=index, position=removed)

    def recompute(
        self,
        sweep: SweepConfig | None = None,
        *,
        epsilon: float = BREAK_EVEN_EPSILON,
    ) -> PayoffAnalysis:
        return analyze(self._positions, sweep=sweep, epsilon=epsilon)
