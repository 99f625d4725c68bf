"""Pricing schemas — rule I/O for the admin API and engine results."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

RuleType = Literal["discount", "markup"]
RuleScope = Literal["all", "make", "model", "vin", "part"]
AmountType = Literal["percent", "fixed"]


class PriceRuleData(BaseModel):
    """A price rule as the engine sees it (stored values, unvalidated)."""

    id: Optional[str] = None
    type: Optional[str] = None
    scope: Optional[str] = None
    scope_value: Optional[str] = None
    amount: float = 0
    amount_type: Optional[str] = None
    is_active: Optional[bool] = True
    created_at: Optional[datetime] = None


class PriceRuleCreate(BaseModel):
    type: RuleType
    scope: RuleScope = "all"
    scope_value: Optional[str] = None
    amount: float = Field(gt=0)
    amount_type: AmountType = "percent"

    @field_validator("scope_value")
    @classmethod
    def _strip_scope_value(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    @model_validator(mode="after")
    def _check_scope_value(self) -> "PriceRuleCreate":
        if self.scope == "all":
            self.scope_value = None
        elif not self.scope_value:
            raise ValueError(f"scope_value is required for scope '{self.scope}'")
        return self


class PriceRuleUpdate(PriceRuleCreate):
    pass


class PriceRuleResponse(BaseModel):
    id: str
    type: str
    scope: str
    scope_value: Optional[str] = None
    amount: float
    amount_type: str
    is_active: bool
    created_at: Optional[datetime] = None

    @classmethod
    def from_rule(cls, rule: Any) -> "PriceRuleResponse":
        return cls(
            id=str(rule.id),
            type=rule.type,
            scope=rule.scope,
            scope_value=rule.scope_value,
            amount=float(rule.amount),
            amount_type=rule.amount_type,
            is_active=bool(rule.is_active),
            created_at=rule.created_at,
        )


class PriceResolution(BaseModel):
    """Result from the price rule engine."""

    original_price: float
    final_price: float
    has_discount: bool = False
    has_markup: bool = False
    applied_rule: Optional[Any] = None  # the winning rule object, untouched


class PriceResolutionResponse(BaseModel):
    part_id: str
    original_price: float
    final_price: float
    has_discount: bool
    has_markup: bool
    applied_rule: Optional[PriceRuleResponse] = None
    display_price: str

    @classmethod
    def build(cls, part_id: str, resolution: PriceResolution, display_price: str) -> "PriceResolutionResponse":
        rule = resolution.applied_rule
        return cls(
            part_id=part_id,
            original_price=resolution.original_price,
            final_price=resolution.final_price,
            has_discount=resolution.has_discount,
            has_markup=resolution.has_markup,
            applied_rule=PriceRuleResponse.from_rule(rule) if rule is not None else None,
            display_price=display_price,
        )
