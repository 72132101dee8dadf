"""Ledger postings of commodities held in accounts."""

import datetime
from decimal import Decimal

from sqlalchemy import Date, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from taxharvest.db.session import Base, TimestampMixin
from taxharvest.db.types import DecimalString


class PostingRecord(TimestampMixin, Base):
    """One ledger line. Positive quantity = acquisition, negative = disposal."""

    __tablename__ = "postings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account: Mapped[str] = mapped_column(String(255), index=True)  # e.g. Assets:Equity:NIFTY
    commodity: Mapped[str] = mapped_column(String(50), index=True)
    quantity: Mapped[Decimal] = mapped_column(DecimalString(64))
    amount: Mapped[Decimal] = mapped_column(DecimalString(64))
    date: Mapped[datetime.date] = mapped_column(Date, index=True)
