"""Price rules — automatic discounts and markups on the storefront."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base, UUIDMixin, TimestampMixin


class PriceRule(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "price_rules"

    type: Mapped[str] = mapped_column(String(20), nullable=False)  # discount|markup

    # Matching (scope_value is NULL only for scope=all)
    scope: Mapped[str] = mapped_column(String(20), nullable=False, default="all")  # all|make|model|vin|part
    scope_value: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)

    # Adjustment
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    amount_type: Mapped[str] = mapped_column(String(20), nullable=False, default="percent")  # percent|fixed

    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
