"""Test fixtures and configuration."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.pricing.engine import PriceRuleEngine
from src.schemas.part import PartPricing
from src.schemas.pricing import PriceRuleData

BASE_TIME = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def engine():
    """Create PriceRuleEngine."""
    return PriceRuleEngine()


@pytest.fixture
def make_rule():
    """Factory for price rules as the engine receives them."""

    def _make_rule(
        type: str = "discount",
        scope: str = "all",
        scope_value=None,
        amount: float = 10,
        amount_type: str = "percent",
        is_active=True,
        age_minutes=None,
    ) -> PriceRuleData:
        created_at = None
        if age_minutes is not None:
            created_at = BASE_TIME - timedelta(minutes=age_minutes)
        return PriceRuleData(
            id=str(uuid.uuid4()),
            type=type,
            scope=scope,
            scope_value=scope_value,
            amount=amount,
            amount_type=amount_type,
            is_active=is_active,
            created_at=created_at,
        )

    return _make_rule


@pytest.fixture
def make_part():
    """Factory for the pricing view of a part."""

    def _make_part(
        price: float = 100,
        quantity=1,
        price_per="lot",
        make=None,
        model=None,
        vin=None,
        id=None,
    ) -> PartPricing:
        return PartPricing(
            id=id or str(uuid.uuid4()),
            make=make,
            model=model,
            vin=vin,
            price=price,
            quantity=quantity,
            price_per=price_per,
        )

    return _make_part


@pytest.fixture
def mock_db():
    """Mock async database session."""
    db = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def db_result():
    """Factory for the object ``await db.execute(...)`` returns."""

    def _db_result(rows=None, one=None):
        result = MagicMock()
        result.scalars.return_value.all.return_value = list(rows or [])
        result.scalar_one_or_none.return_value = one
        return result

    return _db_result


@pytest.fixture
def make_db_part():
    """Factory for Part rows as the repositories load them."""
    from decimal import Decimal

    from src.models.part import Part

    def _make_db_part(
        name: str = "Alternator",
        price="95.00",
        quantity: int = 1,
        price_per: str = "lot",
        make=None,
        photos=None,
    ) -> Part:
        return Part(
            id=uuid.uuid4(),
            stock_number=None,
            name=name,
            description=None,
            category="electrical",
            condition="used",
            vin=None,
            year=None,
            make=make,
            model=None,
            price=Decimal(str(price)),
            quantity=quantity,
            price_per=price_per,
            photos=list(photos or []),
            is_published=True,
            is_sold=False,
            sold_price=None,
            sold_at=None,
        )

    return _make_db_part
