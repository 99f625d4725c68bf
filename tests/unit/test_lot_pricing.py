"""Tests for lot / item price conversion."""

from decimal import Decimal

import pytest

from src.pricing.lot import get_item_price, get_lot_price


class TestGetLotPrice:
    """Lot price is always the total for the whole quantity."""

    def test_item_mode_multiplies(self):
        assert get_lot_price(300, 3, "item") == 900

    def test_lot_mode_unchanged(self):
        assert get_lot_price(900, 3, "lot") == 900

    def test_unknown_mode_treated_as_lot(self):
        assert get_lot_price(900, 3, "dozen") == 900
        assert get_lot_price(900, 3, None) == 900

    def test_missing_quantity_is_one(self):
        assert get_lot_price(40, None, "item") == 40
        assert get_lot_price(40, 0, "item") == 40

    def test_defaults(self):
        assert get_lot_price(75) == 75

    def test_no_rounding(self):
        assert get_lot_price(0.333, 3, "item") == pytest.approx(0.999)

    def test_decimal_input(self):
        assert get_lot_price(Decimal("12.50"), 4, "item") == 50.0


class TestGetItemPrice:
    """Item price is always the per-unit price."""

    def test_item_mode_unchanged(self):
        assert get_item_price(300, 3, "item") == 300

    def test_lot_mode_divides(self):
        assert get_item_price(900, 3, "lot") == 300

    def test_missing_quantity_no_division_by_zero(self):
        assert get_item_price(50, 0, "lot") == 50
        assert get_item_price(50, None, None) == 50

    def test_lot_mode_not_rounded(self):
        assert get_item_price(100, 3, "lot") == pytest.approx(33.3333333)


class TestRoundTrip:
    """Converting to a lot total and back gives the original item price."""

    @pytest.mark.parametrize("price,quantity,price_per", [
        (19.99, 7, "item"),
        (19.99, 7, "lot"),
        (1200, 1, "lot"),
        (0.5, 250, "item"),
    ])
    def test_lot_total_back_to_item(self, price, quantity, price_per):
        lot_total = get_lot_price(price, quantity, price_per)
        as_item = get_item_price(lot_total, quantity, "lot")
        assert as_item == pytest.approx(get_item_price(price, quantity, price_per))
