import pytest

from payoff_lab.errors import InvalidPosition
from payoff_lab.schemas.positions import Position
from payoff_lab.services.book import PortfolioBook, edit_position
from payoff_lab.services.payoff import evaluate, payoff
from payoff_lab.services.sweep import leg_contributions, sweep_prices


def test_seeded_book_has_four_mid_priced_legs(seed_book):
    legs = seed_book.positions
    assert len(seed_book) == 4
    assert [p.kind for p in legs] == ["call", "call", "put", "put"]
    assert [p.direction for p in legs] == ["long", "long", "short", "long"]
    assert [p.strike for p in legs] == [100, 102.5, 103, 105]
    assert [p.premium for p in legs] == pytest.approx([11.045, 13.05, 14.75, 17.0])


def test_editing_one_strike_only_changes_that_leg(seed_book):
    before = leg_contributions(seed_book.positions)

    res = seed_book.set_field(1, "strike", 110)
    assert res.status == "ok"
    assert seed_book.positions[1].strike == 110

    after = leg_contributions(seed_book.positions)
    assert after[1] != before[1]
    for i in (0, 2, 3):
        assert after[i] == before[i]


def test_edit_accepts_numeric_strings_and_aliases(seed_book):
    assert seed_book.set_field(0, "premium", "3.5").status == "ok"
    assert seed_book.positions[0].premium == 3.5

    assert seed_book.set_field(0, "type", "Put").status == "ok"
    assert seed_book.positions[0].kind == "put"

    res = seed_book.set_field(0, "long_short", "short")
    assert res.status == "ok"
    assert res.field == "direction"
    assert seed_book.positions[0].direction == "short"


def test_negative_premium_edit_is_accepted(seed_book):
    assert seed_book.set_field(2, "premium", -4).status == "ok"
    assert seed_book.positions[2].premium == -4


@pytest.mark.parametrize(
    "field,value",
    [
        ("strike", 0),
        ("strike", -5),
        ("strike", "abc"),
        ("strike", float("nan")),
        ("strike", None),
        ("strike", True),
        ("premium", False),
        ("premium", ""),
        ("kind", "straddle"),
        ("direction", "sideways"),
        ("expiry", "2025-12-17"),
    ],
)
def test_invalid_edit_is_rejected_and_prior_value_kept(seed_book, field, value):
    before = seed_book.positions

    res = seed_book.set_field(0, field, value)

    assert res.status == "error"
    assert res.error
    assert seed_book.positions == before


def test_edit_out_of_range_index(seed_book):
    res = seed_book.set_field(9, "strike", 100)
    assert res.status == "error"
    assert "out of range" in res.error

    assert seed_book.set_field(-1, "strike", 100).status == "error"


def test_edit_position_raises_invalid_position():
    p = Position(kind="call", strike=100, premium=1)
    with pytest.raises(InvalidPosition):
        edit_position(p, "strike", 0)
    assert p.strike == 100


def test_remove_leg_subtracts_its_standalone_payoff(seed_book):
    full = seed_book.positions
    removed_leg = full[2]

    res = seed_book.remove(2)

    assert res.status == "ok"
    assert res.position == removed_leg
    assert len(seed_book) == len(full) - 1
    for s in sweep_prices():
        assert evaluate(seed_book.positions, s) == pytest.approx(evaluate(full, s) - payoff(removed_leg, s), abs=1e-12)


def test_remove_out_of_range_keeps_book(seed_book):
    res = seed_book.remove(4)
    assert res.status == "error"
    assert len(seed_book) == 4


def test_remove_all_legs_gives_undefined_metrics(seed_book):
    while len(seed_book):
        assert seed_book.remove(0).status == "ok"
    analysis = seed_book.recompute()
    assert analysis.metrics.status == "undefined"
    assert analysis.display.max_loss == "-"


def test_recompute_sees_applied_edit(seed_book):
    seed_book.set_field(0, "premium", 0)
    analysis = seed_book.recompute()
    assert analysis.positions[0].premium == 0
    # Leg 0 now costs 11.045 less everywhere.
    assert analysis.metrics.max_loss == pytest.approx(-24.345 + 11.045)


def test_add_and_add_quote():
    book = PortfolioBook()
    book.add(Position(kind="call", strike=100, premium=2))
    res = book.add_quote({"strike_price": 90, "type": "Put", "bid": 1, "ask": 2, "long_short": "short"})
    assert res.status == "ok"
    assert res.index == 1
    assert book.positions[1] == Position(kind="put", strike=90, premium=1.5, direction="short")


def test_positions_property_is_a_copy(seed_book):
    legs = seed_book.positions
    legs.clear()
    assert len(seed_book) == 4


def test_catalog_module_docstring():
    from payoff_lab.meta import catalog

    assert catalog.__doc__ and catalog.__doc__.startswith("Static metadata")
