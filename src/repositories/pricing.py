"""Price rule repository — CRUD over the price_rules table."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional, Sequence

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.pricing import PriceRule
from src.schemas.pricing import PriceRuleCreate, PriceRuleUpdate

logger = structlog.get_logger()


def parse_uuid(value: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


class PriceRuleRepository:
    """Loads and edits price rules."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> Sequence[PriceRule]:
        """All rules, newest first (admin list)."""
        result = await self.db.execute(
            select(PriceRule).order_by(PriceRule.created_at.desc())
        )
        return result.scalars().all()

    async def list_active(self) -> Sequence[PriceRule]:
        """Active rules, newest first (engine input)."""
        result = await self.db.execute(
            select(PriceRule)
            .where(PriceRule.is_active == True)  # noqa: E712
            .order_by(PriceRule.created_at.desc())
        )
        return result.scalars().all()

    async def get(self, rule_id: str) -> Optional[PriceRule]:
        rid = parse_uuid(rule_id)
        if rid is None:
            return None
        result = await self.db.execute(select(PriceRule).where(PriceRule.id == rid))
        return result.scalar_one_or_none()

    async def create(self, data: PriceRuleCreate) -> PriceRule:
        rule = PriceRule(
            type=data.type,
            scope=data.scope,
            scope_value=data.scope_value,
            amount=data.amount,
            amount_type=data.amount_type,
            is_active=True,
        )
        self.db.add(rule)
        await self.db.flush()

        logger.info(
            "price_rule_created",
            rule_id=str(rule.id),
            type=rule.type,
            scope=rule.scope,
            scope_value=rule.scope_value,
        )
        return rule

    async def update(self, rule: PriceRule, data: PriceRuleUpdate) -> PriceRule:
        rule.type = data.type
        rule.scope = data.scope
        rule.scope_value = data.scope_value
        rule.amount = data.amount
        rule.amount_type = data.amount_type
        rule.updated_at = datetime.now(timezone.utc)
        await self.db.flush()

        logger.info("price_rule_updated", rule_id=str(rule.id))
        return rule

    async def toggle_active(self, rule: PriceRule) -> PriceRule:
        rule.is_active = not rule.is_active
        rule.updated_at = datetime.now(timezone.utc)
        await self.db.flush()

        logger.info("price_rule_toggled", rule_id=str(rule.id), is_active=rule.is_active)
        return rule

    async def delete(self, rule: PriceRule) -> None:
        await self.db.delete(rule)
        await self.db.flush()
        logger.info("price_rule_deleted", rule_id=str(rule.id))
