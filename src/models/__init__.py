"""SQLAlchemy ORM models."""

from src.models.base import Base
from src.models.part import Part
from src.models.pricing import PriceRule

__all__ = [
    "Base",
    "Part",
    "PriceRule",
]
