"""Seed a demo ledger and print its capital gains.

Usage:
    PYTHONPATH=src python scripts/seed_demo.py [DATABASE_URL]

Defaults to a local SQLite file; point it at an empty database. Creates the
tables, inserts a small NIFTY ledger with prices, then prints the harvest
result as JSON.
"""

import asyncio
import json
import logging
import sys
from datetime import date
from decimal import Decimal

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logger = logging.getLogger("seed_demo")
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///taxharvest_demo.db"
TODAY = date(2024, 6, 30)

COMMODITIES = [
    {"name": "NIFTY", "harvest": 365, "grandfather": "2018-01-31"},
]

# (account, commodity, quantity, amount, date)
POSTINGS = [
    ("Assets:Equity:NIFTY", "NIFTY", "10", "1000", date(2017, 6, 1)),
    ("Assets:Equity:NIFTY", "NIFTY", "10", "1200", date(2019, 3, 1)),
    ("Assets:Equity:NIFTY", "NIFTY", "-15", "-1800", date(2021, 5, 10)),
    ("Assets:Equity:NIFTY", "NIFTY", "8", "1040", date(2024, 1, 15)),
]

# (commodity, date, value)
PRICES = [
    ("NIFTY", date(2018, 1, 31), "110"),
    ("NIFTY", date(2024, 6, 28), "150"),
]


async def main() -> None:
    from taxharvest.accounting.capital_gains import CapitalGainsEngine
    from taxharvest.db.session import Base, build_engine, build_session_factory
    from taxharvest.domain.models.gains import Commodity

    database_url = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_DATABASE_URL
    engine = build_engine(database_url, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = build_session_factory(engine)

    try:
        async with session_factory() as session:
            try:
                await seed(session)
                await session.commit()
                gains = await CapitalGainsEngine(session).calculate(
                    TODAY, commodities=[Commodity(**c) for c in COMMODITIES],
                )
            except Exception:
                await session.rollback()
                logger.exception("Demo failed")
                sys.exit(1)
    finally:
        await engine.dispose()

    output = {"capital_gains": {k: v.model_dump(mode="json") for k, v in gains.items()}}
    print(json.dumps(output, indent=2))


async def seed(session) -> None:
    from taxharvest.db.repos.posting_repo import PostingRepo
    from taxharvest.domain.models.gains import Posting
    from taxharvest.infra.price.service import PriceService

    await PostingRepo(session).add_many(
        Posting(account=a, commodity=c, quantity=Decimal(q), amount=Decimal(amt), date=d)
        for a, c, q, amt, d in POSTINGS
    )
    prices = PriceService(session)
    for commodity, day, value in PRICES:
        await prices.add_price(commodity, day, Decimal(value))
    logger.info("Seeded %d postings and %d prices", len(POSTINGS), len(PRICES))


if __name__ == "__main__":
    asyncio.run(main())
