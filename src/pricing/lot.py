"""Lot pricing — one formula for lot totals and per-item prices.

A part's ``price`` is stored either for the whole lot (``price_per="lot"``)
or for a single item (``price_per="item"``). Everything that shows or sums
prices goes through :func:`get_lot_price` / :func:`get_item_price` so the
storage mode never leaks into callers.

The two core functions never round. Rounding to cents happens after the
arithmetic in the edit operations below and in :func:`format_price`.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional, Sequence

from src.schemas.part import MergedLot, SaleSplit

CENTS = Decimal("0.01")

CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£"}


def get_lot_price(price: Any, quantity: Optional[int] = 1, price_per: Optional[str] = "lot") -> float:
    """Total price for the whole quantity, whatever the storage mode."""
    if price_per == "item":
        return float(price or 0) * (quantity or 1)
    return float(price or 0)


def get_item_price(price: Any, quantity: Optional[int] = 1, price_per: Optional[str] = "lot") -> float:
    """Price of a single unit, whatever the storage mode."""
    if price_per == "item":
        return float(price or 0)
    return float(price or 0) / (quantity or 1)


def round_cents(value: Any) -> float:
    """Round half-up to currency precision."""
    return float(Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP))


def format_price(value: Any, currency: str = "USD") -> str:
    """Render a price for display, e.g. ``$1,234.50``."""
    amount = round_cents(value) + 0.0  # folds -0.0 into 0.0
    symbol = CURRENCY_SYMBOLS.get(currency.upper())
    if symbol is None:
        return f"{amount:,.2f} {currency.upper()}"
    if amount < 0:
        return f"-{symbol}{-amount:,.2f}"
    return f"{symbol}{amount:,.2f}"


def apply_bulk_price(price: Any, mode: str, value: float) -> float:
    """Bulk price edit for one stored price.

    Modes: ``set``, ``increase`` / ``decrease`` (flat amount) and
    ``percent_increase``. A decrease never goes below zero.
    """
    if value < 0:
        raise ValueError("value must be >= 0")

    current = float(price or 0)
    if mode == "set":
        result = value
    elif mode == "increase":
        result = current + value
    elif mode == "decrease":
        result = max(0.0, current - value)
    elif mode == "percent_increase":
        result = current * (1 + value / 100)
    else:
        raise ValueError(f"unknown bulk price mode: {mode}")

    return round_cents(result)


def split_sale(
    price: Any,
    quantity: Optional[int],
    price_per: Optional[str],
    sell_quantity: int,
) -> SaleSplit:
    """Sell ``sell_quantity`` items out of a lot.

    Item-priced parts keep their stored price. Lot-priced parts are
    re-priced to the remaining items' share of the lot.
    """
    available = quantity or 1
    if sell_quantity < 1:
        raise ValueError("must sell at least one item")
    if sell_quantity > available:
        raise ValueError(f"cannot sell {sell_quantity} items, only {available} available")

    item_price = get_item_price(price, available, price_per)
    remaining = available - sell_quantity

    if price_per == "item":
        remaining_price = float(price or 0)
    else:
        remaining_price = round_cents(item_price * remaining)

    return SaleSplit(
        sold_quantity=sell_quantity,
        sold_value=round_cents(item_price * sell_quantity),
        remaining_quantity=remaining,
        remaining_price=remaining_price,
        is_sold_out=remaining == 0,
    )


def merge_lot(parts: Sequence[Any], price_per: str = "lot", name: Optional[str] = None) -> MergedLot:
    """Combine several parts into one lot. The first part is the primary."""
    if len(parts) < 2:
        raise ValueError("need at least two parts to merge")

    primary = parts[0]
    total_quantity = sum(p.quantity or 1 for p in parts)

    if price_per == "lot":
        price = sum(get_lot_price(p.price, p.quantity, p.price_per) for p in parts)
    else:
        price = float(primary.price or 0)

    photos: list[str] = []
    for p in parts:
        for photo in p.photos or []:
            if photo not in photos:
                photos.append(photo)

    return MergedLot(
        name=(name or "").strip() or primary.name,
        quantity=total_quantity,
        price=round_cents(price),
        price_per=price_per,
        description=primary.description,
        photos=photos,
    )
