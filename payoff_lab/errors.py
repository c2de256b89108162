from __future__ import annotations


class PayoffLabError(ValueError):
    """Base class for errors raised by the payoff core."""


class InvalidPosition(PayoffLabError):
    """A leg edit would produce an invalid position (bad number, strike <= 0, unknown field)."""


class DegenerateSweep(PayoffLabError):
    """The price sweep is empty or ill-formed (price_max < price_min, or step <= 0)."""
