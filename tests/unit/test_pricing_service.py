"""Tests for the storage-backed pricing service (repositories mocked)."""

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.pricing.service import PricingService


@pytest.fixture
def rules_repo():
    repo = MagicMock()
    repo.list_active = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def parts_repo():
    repo = MagicMock()
    repo.list_by_ids = AsyncMock(return_value=[])
    repo.record_sale = AsyncMock()
    repo.apply_merge = AsyncMock()
    return repo


@pytest.fixture
def service(mock_db, parts_repo, rules_repo):
    return PricingService(mock_db, parts=parts_repo, rules=rules_repo)


class TestPricing:

    @pytest.mark.asyncio
    async def test_price_part_uses_active_rules(self, service, rules_repo, make_part, make_rule):
        rules_repo.list_active.return_value = [make_rule(type="discount", amount=20)]

        result = await service.price_part(make_part(price=Decimal("50.00")))
        assert result.final_price == 40
        assert result.has_discount is True

    @pytest.mark.asyncio
    async def test_price_parts_fetches_rules_once(self, service, rules_repo, make_part, make_rule):
        rules_repo.list_active.return_value = [make_rule(type="markup", scope="make", scope_value="BMW", amount=10, amount_type="fixed")]
        parts = [make_part(price=100, make="BMW"), make_part(price=100, make="Audi")]

        results = await service.price_parts(parts)
        rules_repo.list_active.assert_awaited_once()
        assert [r.final_price for r in results] == [110, 100]


class TestEditing:

    @pytest.mark.asyncio
    async def test_bulk_price(self, service, parts_repo, mock_db):
        parts = [
            SimpleNamespace(id="p1", price=Decimal("10.00")),
            SimpleNamespace(id="p2", price=Decimal("0.99")),
        ]
        parts_repo.list_by_ids.return_value = parts

        changes = await service.bulk_price(["p1", "p2"], "percent_increase", 10)

        assert [(c.part_id, c.old_price, c.new_price) for c in changes] == [
            ("p1", 10.0, 11.0),
            ("p2", 0.99, 1.09),
        ]
        parts_repo.set_price.assert_any_call(parts[0], 11.0)
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_sell(self, service, parts_repo, mock_db):
        part = SimpleNamespace(id="p1", price=Decimal("60.00"), quantity=6, price_per="lot")

        sale = await service.sell(part, 2)

        assert sale.sold_value == 20
        assert sale.remaining_price == 40
        parts_repo.record_sale.assert_awaited_once_with(part, sale)
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_sell_too_many(self, service, mock_db):
        part = SimpleNamespace(id="p1", price=Decimal("60.00"), quantity=1, price_per="lot")
        with pytest.raises(ValueError):
            await service.sell(part, 2)
        mock_db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_merge(self, service, parts_repo):
        parts = [
            SimpleNamespace(name="Caliper", price=40, quantity=1, price_per="lot", photos=[], description=None),
            SimpleNamespace(name="Caliper", price=35, quantity=1, price_per="lot", photos=["c.jpg"], description=None),
        ]

        lot = await service.merge(parts, "lot")

        assert lot.quantity == 2
        assert lot.price == 75
        parts_repo.apply_merge.assert_awaited_once_with(parts[0], parts[1:], lot)
