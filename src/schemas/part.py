"""Part schemas for pricing and admin part operations."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from src.schemas.pricing import PriceResolutionResponse

BulkPriceMode = Literal["set", "increase", "decrease", "percent_increase"]


class PartPricing(BaseModel):
    """The subset of a part the pricing core reads."""

    id: Optional[str] = None
    make: Optional[str] = None
    model: Optional[str] = None
    vin: Optional[str] = None
    price: float = 0
    quantity: Optional[int] = 1
    price_per: Optional[str] = "lot"


class PartListItem(BaseModel):
    id: str
    stock_number: Optional[str] = None
    name: str
    year: Optional[int] = None
    make: Optional[str] = None
    model: Optional[str] = None
    condition: str
    category: str
    quantity: int
    price_per: str
    item_price: float
    photo: Optional[str] = None
    pricing: PriceResolutionResponse


class BulkPriceRequest(BaseModel):
    part_ids: List[str] = Field(min_length=1)
    mode: BulkPriceMode = "set"
    value: float = Field(ge=0)


class BulkPriceChange(BaseModel):
    part_id: str
    old_price: float
    new_price: float


class SellRequest(BaseModel):
    quantity: int = Field(ge=1)


class SaleSplit(BaseModel):
    """Outcome of selling some items out of a lot."""

    sold_quantity: int
    sold_value: float
    remaining_quantity: int
    remaining_price: float
    is_sold_out: bool


class MergeLotRequest(BaseModel):
    part_ids: List[str] = Field(min_length=2)  # first id is the primary part
    name: Optional[str] = None
    price_per: Literal["lot", "item"] = "lot"

    @field_validator("part_ids")
    @classmethod
    def _no_duplicates(cls, v: List[str]) -> List[str]:
        if len(set(v)) != len(v):
            raise ValueError("part_ids must not repeat")
        return v


class MergedLot(BaseModel):
    name: str
    quantity: int
    price: float
    price_per: str
    description: Optional[str] = None
    photos: List[str] = []
