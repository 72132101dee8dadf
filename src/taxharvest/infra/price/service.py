"""PriceService — unit price lookups backed by the prices table."""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taxharvest.db.models.price import PriceRecord
from taxharvest.domain.models.gains import Price

logger = logging.getLogger(__name__)


class PriceService:
    """Resolves the most recent known unit price of a commodity on or before a date."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_unit_price(self, commodity: str, as_of: date) -> Price:
        """Latest price with date <= as_of, or the zero sentinel when none exists."""
        result = await self._session.execute(
            select(PriceRecord)
            .where(
                PriceRecord.commodity == commodity,
                PriceRecord.date <= as_of,
            )
            .order_by(PriceRecord.date.desc())
            .limit(1)
        )
        row = result.scalar_one_or_none()
        if row is None:
            logger.warning("No price for %s on or before %s, using zero", commodity, as_of.isoformat())
            return Price.zero(commodity)
        return Price(commodity=commodity, value=row.value, date=row.date)

    async def add_price(self, commodity: str, on: date, value: Decimal, source: str = "manual") -> None:
        self._session.add(PriceRecord(commodity=commodity, date=on, value=value, source=source))
        await self._session.flush()
