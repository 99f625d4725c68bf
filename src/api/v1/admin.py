"""Admin API — price rules and part pricing operations."""

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db
from src.pricing.service import PricingService
from src.repositories.pricing import PriceRuleRepository
from src.schemas.part import (
    BulkPriceChange,
    BulkPriceRequest,
    MergedLot,
    MergeLotRequest,
    SaleSplit,
    SellRequest,
)
from src.schemas.pricing import PriceRuleCreate, PriceRuleResponse, PriceRuleUpdate

logger = structlog.get_logger()

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


async def _get_rule_or_404(repo: PriceRuleRepository, rule_id: str):
    rule = await repo.get(rule_id)
    if rule is None:
        raise HTTPException(status_code=404, detail="Price rule not found")
    return rule


@router.get("/price-rules", response_model=list[PriceRuleResponse])
async def list_price_rules(db: AsyncSession = Depends(get_db)) -> list[PriceRuleResponse]:
    """All price rules, newest first, active or not."""
    rules = await PriceRuleRepository(db).list_all()
    return [PriceRuleResponse.from_rule(r) for r in rules]


@router.post("/price-rules", response_model=PriceRuleResponse, status_code=201)
async def create_price_rule(
    data: PriceRuleCreate,
    db: AsyncSession = Depends(get_db),
) -> PriceRuleResponse:
    """Create a new active price rule."""
    rule = await PriceRuleRepository(db).create(data)
    await db.commit()
    await db.refresh(rule)
    return PriceRuleResponse.from_rule(rule)


@router.patch("/price-rules/{rule_id}", response_model=PriceRuleResponse)
async def update_price_rule(
    rule_id: str,
    data: PriceRuleUpdate,
    db: AsyncSession = Depends(get_db),
) -> PriceRuleResponse:
    """Replace a rule's type, scope and amount."""
    repo = PriceRuleRepository(db)
    rule = await _get_rule_or_404(repo, rule_id)
    await repo.update(rule, data)
    await db.commit()
    return PriceRuleResponse.from_rule(rule)


@router.post("/price-rules/{rule_id}/toggle", response_model=PriceRuleResponse)
async def toggle_price_rule(
    rule_id: str,
    db: AsyncSession = Depends(get_db),
) -> PriceRuleResponse:
    """Switch a rule on or off without deleting it."""
    repo = PriceRuleRepository(db)
    rule = await _get_rule_or_404(repo, rule_id)
    await repo.toggle_active(rule)
    await db.commit()
    return PriceRuleResponse.from_rule(rule)


@router.delete("/price-rules/{rule_id}", status_code=204)
async def delete_price_rule(
    rule_id: str,
    db: AsyncSession = Depends(get_db),
) -> None:
    repo = PriceRuleRepository(db)
    rule = await _get_rule_or_404(repo, rule_id)
    await repo.delete(rule)
    await db.commit()


@router.post("/parts/bulk-price", response_model=list[BulkPriceChange])
async def bulk_price(
    data: BulkPriceRequest,
    db: AsyncSession = Depends(get_db),
) -> list[BulkPriceChange]:
    """Change the stored price of several parts at once."""
    return await PricingService(db).bulk_price(data.part_ids, data.mode, data.value)


@router.post("/parts/{part_id}/sell", response_model=SaleSplit)
async def sell_part(
    part_id: str,
    data: SellRequest,
    db: AsyncSession = Depends(get_db),
) -> SaleSplit:
    """Sell some or all items of a part."""
    service = PricingService(db)
    part = await service.parts.get(part_id)
    if part is None:
        raise HTTPException(status_code=404, detail="Part not found")
    if part.is_sold:
        raise HTTPException(status_code=400, detail="Part is already sold")

    try:
        return await service.sell(part, data.quantity)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/parts/merge", response_model=MergedLot)
async def merge_parts(
    data: MergeLotRequest,
    db: AsyncSession = Depends(get_db),
) -> MergedLot:
    """Merge several parts into one lot (first id is kept)."""
    service = PricingService(db)
    parts = await service.parts.list_by_ids(data.part_ids)
    if len(parts) != len(data.part_ids):
        raise HTTPException(status_code=404, detail="One or more parts not found")

    try:
        return await service.merge(parts, data.price_per, data.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok", "version": "0.1.0"}
