"""Historical unit prices of commodities."""

import datetime
from decimal import Decimal

from sqlalchemy import Date, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from taxharvest.db.session import Base, TimestampMixin
from taxharvest.db.types import DecimalString


class PriceRecord(TimestampMixin, Base):
    """Unit price of a commodity on a day. Keyed by (commodity, date)."""

    __tablename__ = "prices"
    __table_args__ = (UniqueConstraint("commodity", "date", name="uq_prices_commodity_date"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    commodity: Mapped[str] = mapped_column(String(50), index=True)
    date: Mapped[datetime.date] = mapped_column(Date, index=True)
    value: Mapped[Decimal] = mapped_column(DecimalString(64))
    source: Mapped[str] = mapped_column(String(50), default="manual")
