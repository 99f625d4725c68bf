"""Part model — one inventory entry (a single item or a lot)."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import Boolean, DateTime, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base, TimestampMixin, UUIDMixin


class Part(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "parts"

    # Identity
    stock_number: Mapped[Optional[str]] = mapped_column(String(20), unique=True, nullable=True)
    name: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(50), default="other")
    condition: Mapped[str] = mapped_column(String(30), default="used")

    # Donor vehicle (VIN is an informal join key to vehicles)
    vin: Mapped[Optional[str]] = mapped_column(String(17), nullable=True, index=True)
    year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    make: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    model: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Pricing
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=0)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    price_per: Mapped[str] = mapped_column(String(10), nullable=False, default="lot")  # lot|item

    photos: Mapped[List[str]] = mapped_column(ARRAY(String), default=list)

    # Status
    is_published: Mapped[bool] = mapped_column(Boolean, default=True)
    is_sold: Mapped[bool] = mapped_column(Boolean, default=False)
    sold_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    sold_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
