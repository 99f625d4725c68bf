"""Parts API — storefront listing with rule-adjusted prices."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.database import get_db
from src.pricing.lot import format_price, get_item_price
from src.pricing.service import PricingService
from src.schemas.part import PartListItem
from src.schemas.pricing import PriceResolutionResponse

logger = structlog.get_logger()

router = APIRouter(prefix="/api/v1", tags=["parts"])


@router.get("/parts")
async def list_parts(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
) -> dict:
    """List published, unsold parts with their displayed prices.

    Args:
        limit: Max results
        offset: Pagination offset
        db: Database session

    Returns:
        {"parts": [...], "count": int}
    """
    service = PricingService(db)
    parts = await service.parts.list_storefront(limit=limit, offset=offset)
    resolutions = await service.price_parts(parts)

    items = [
        PartListItem(
            id=str(part.id),
            stock_number=part.stock_number,
            name=part.name,
            year=part.year,
            make=part.make,
            model=part.model,
            condition=part.condition,
            category=part.category,
            quantity=part.quantity or 1,
            price_per=part.price_per or "lot",
            item_price=get_item_price(part.price, part.quantity, part.price_per),
            photo=part.photos[0] if part.photos else None,
            pricing=PriceResolutionResponse.build(
                str(part.id), resolution, format_price(resolution.final_price, settings.currency)
            ),
        )
        for part, resolution in zip(parts, resolutions)
    ]

    return {"parts": [item.model_dump() for item in items], "count": len(items)}


@router.get("/parts/{part_id}/price", response_model=PriceResolutionResponse)
async def get_part_price(
    part_id: str,
    db: AsyncSession = Depends(get_db),
) -> PriceResolutionResponse:
    """Displayed price for a single part (detail page)."""
    service = PricingService(db)
    part = await service.parts.get(part_id)
    if part is None:
        raise HTTPException(status_code=404, detail="Part not found")

    resolution = await service.price_part(part)
    return PriceResolutionResponse.build(
        str(part.id), resolution, format_price(resolution.final_price, settings.currency)
    )
