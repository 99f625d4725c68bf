"""Pricing service — loads parts and rules from storage and runs the core."""

from __future__ import annotations

from typing import Any, Optional, Sequence

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from src.pricing.engine import PriceRuleEngine
from src.pricing.lot import apply_bulk_price, merge_lot, split_sale
from src.repositories.part import PartRepository
from src.repositories.pricing import PriceRuleRepository
from src.schemas.part import BulkPriceChange, MergedLot, SaleSplit
from src.schemas.pricing import PriceResolution

logger = structlog.get_logger()


class PricingService:
    """Storage-backed wrapper around the pure pricing functions."""

    def __init__(
        self,
        db: AsyncSession,
        parts: Optional[PartRepository] = None,
        rules: Optional[PriceRuleRepository] = None,
        engine: Optional[PriceRuleEngine] = None,
    ):
        self.db = db
        self.parts = parts or PartRepository(db)
        self.rules = rules or PriceRuleRepository(db)
        self.engine = engine or PriceRuleEngine()

    async def price_part(self, part: Any) -> PriceResolution:
        """Resolve one part's displayed price against the active rules."""
        rules = await self.rules.list_active()
        return self.engine.resolve(part, rules)

    async def price_parts(self, parts: Sequence[Any]) -> list[PriceResolution]:
        """Resolve many parts with a single rule fetch."""
        rules = await self.rules.list_active()
        resolutions = [self.engine.resolve(part, rules) for part in parts]

        logger.info(
            "price_rules_applied",
            parts=len(parts),
            rules=len(rules),
            adjusted=sum(1 for r in resolutions if r.applied_rule is not None),
        )
        return resolutions

    async def bulk_price(self, part_ids: Sequence[str], mode: str, value: float) -> list[BulkPriceChange]:
        """Apply one bulk price edit to every listed part and commit."""
        parts = await self.parts.list_by_ids(part_ids)
        changes = []
        for part in parts:
            new_price = apply_bulk_price(part.price, mode, value)
            changes.append(
                BulkPriceChange(part_id=str(part.id), old_price=float(part.price), new_price=new_price)
            )
            self.parts.set_price(part, new_price)
        await self.db.commit()

        logger.info("bulk_price_applied", mode=mode, value=value, parts=len(changes))
        return changes

    async def sell(self, part: Any, quantity: int) -> SaleSplit:
        """Sell items out of a part's lot and commit."""
        sale = split_sale(part.price, part.quantity, part.price_per, quantity)
        await self.parts.record_sale(part, sale)
        await self.db.commit()
        return sale

    async def merge(self, parts: Sequence[Any], price_per: str, name: Optional[str] = None) -> MergedLot:
        """Merge parts into the first one and commit."""
        lot = merge_lot(parts, price_per=price_per, name=name)
        await self.parts.apply_merge(parts[0], parts[1:], lot)
        await self.db.commit()
        return lot
