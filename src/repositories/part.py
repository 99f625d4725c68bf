"""Part repository — reads parts for pricing and writes price edits."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Sequence

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.part import Part
from src.repositories.pricing import parse_uuid
from src.schemas.part import MergedLot, SaleSplit

logger = structlog.get_logger()


class PartRepository:
    """Manages part lookups and pricing-related updates."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, part_id: str) -> Optional[Part]:
        pid = parse_uuid(part_id)
        if pid is None:
            return None
        result = await self.db.execute(select(Part).where(Part.id == pid))
        return result.scalar_one_or_none()

    async def list_by_ids(self, part_ids: Sequence[str]) -> list[Part]:
        """Parts for the given ids, in the order the ids were given."""
        ids = list(dict.fromkeys(pid for pid in (parse_uuid(p) for p in part_ids) if pid is not None))
        if not ids:
            return []
        result = await self.db.execute(select(Part).where(Part.id.in_(ids)))
        by_id = {p.id: p for p in result.scalars().all()}
        return [by_id[pid] for pid in ids if pid in by_id]

    async def list_storefront(self, limit: int = 50, offset: int = 0) -> Sequence[Part]:
        """Published, unsold parts, newest first."""
        result = await self.db.execute(
            select(Part)
            .where(Part.is_published == True, Part.is_sold == False)  # noqa: E712
            .order_by(Part.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return result.scalars().all()

    def set_price(self, part: Part, price: float) -> None:
        part.price = Decimal(str(price))
        part.updated_at = datetime.now(timezone.utc)

    async def record_sale(self, part: Part, sale: SaleSplit) -> Part:
        """Apply a sale split: shrink the lot or mark it sold."""
        now = datetime.now(timezone.utc)
        if sale.is_sold_out:
            part.is_sold = True
            part.sold_price = Decimal(str(sale.sold_value))
            part.sold_at = now
        else:
            part.quantity = sale.remaining_quantity
            part.price = Decimal(str(sale.remaining_price))
        part.updated_at = now
        await self.db.flush()

        logger.info(
            "part_sale_recorded",
            part_id=str(part.id),
            sold=sale.sold_quantity,
            remaining=sale.remaining_quantity,
            value=sale.sold_value,
        )
        return part

    async def apply_merge(self, primary: Part, merged: Sequence[Part], lot: MergedLot) -> Part:
        """Write the merged lot into the primary part and drop the others."""
        primary.name = lot.name
        primary.quantity = lot.quantity
        primary.price = Decimal(str(lot.price))
        primary.price_per = lot.price_per
        primary.description = lot.description
        primary.photos = list(lot.photos)
        primary.updated_at = datetime.now(timezone.utc)

        merged_ids = [p.id for p in merged]
        if merged_ids:
            await self.db.execute(delete(Part).where(Part.id.in_(merged_ids)))
        await self.db.flush()

        logger.info(
            "parts_merged",
            primary_id=str(primary.id),
            merged=[str(i) for i in merged_ids],
            quantity=lot.quantity,
        )
        return primary
