"""Seed database with demo parts and price rules."""

import asyncio

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from src.config import settings
from src.models.base import Base
from src.models.part import Part
from src.models.pricing import PriceRule


PARTS = [
    {"stock_number": "0001", "name": "Headlight assembly, left", "vin": "WBAPH5C55BA123456", "year": 2011, "make": "BMW", "model": "328i", "price": 180, "quantity": 1, "price_per": "lot", "category": "lighting", "condition": "good"},
    {"stock_number": "0002", "name": "Wheel lug nuts", "vin": "4T1BF1FK5CU123456", "year": 2012, "make": "Toyota", "model": "Camry", "price": 2.5, "quantity": 20, "price_per": "item", "category": "wheels", "condition": "used"},
    {"stock_number": "0003", "name": "Ignition coils (set)", "vin": "1HGCM82633A123456", "year": 2003, "make": "Honda", "model": "Accord", "price": 120, "quantity": 4, "price_per": "lot", "category": "engine", "condition": "excellent"},
    {"stock_number": "0004", "name": "Alternator", "vin": "4T1BF1FK5CU123456", "year": 2012, "make": "Toyota", "model": "Camry", "price": 95, "quantity": 1, "price_per": "lot", "category": "electrical", "condition": "good"},
]

PRICE_RULES = [
    {"type": "discount", "scope": "all", "scope_value": None, "amount": 10, "amount_type": "percent"},
    {"type": "markup", "scope": "make", "scope_value": "BMW", "amount": 15, "amount_type": "fixed"},
    {"type": "discount", "scope": "vin", "scope_value": "4T1BF1FK5CU123456", "amount": 20, "amount_type": "percent"},
]


async def seed():
    """Seed the database with demo data."""
    engine = create_async_engine(settings.database_url)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession)

    async with session_factory() as session:
        for part_data in PARTS:
            session.add(Part(**part_data))
            print(f"  + Part: {part_data['stock_number']} {part_data['name']}")

        for rule_data in PRICE_RULES:
            session.add(PriceRule(**rule_data, is_active=True))
            print(f"  + Rule: {rule_data['type']} {rule_data['scope']} {rule_data['scope_value'] or ''}")

        await session.commit()

    await engine.dispose()
    print("\nSeed completed!")


if __name__ == "__main__":
    asyncio.run(seed())
