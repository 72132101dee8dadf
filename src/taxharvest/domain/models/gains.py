"""Domain types for FIFO capital gains and tax harvesting."""

import datetime
import logging
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, PrivateAttr

logger = logging.getLogger(__name__)

GRANDFATHER_DATE_FORMAT = "%Y-%m-%d"


def parse_grandfather_date(value: str) -> Optional[datetime.date]:
    """Parse a YYYY-MM-DD grandfather date. Empty or malformed input disables grandfathering."""
    if not value:
        return None
    try:
        return datetime.datetime.strptime(value, GRANDFATHER_DATE_FORMAT).date()
    except ValueError:
        logger.warning("Ignoring unparseable grandfather date %r", value)
        return None


class Posting(BaseModel):
    """One ledger line for a commodity in an account."""

    account: str
    commodity: str
    quantity: Decimal  # Positive = acquisition, negative = disposal
    amount: Decimal  # Same sign as quantity
    date: datetime.date

    @property
    def price(self) -> Decimal:
        if self.quantity == 0:
            return Decimal(0)
        return self.amount / self.quantity


class Commodity(BaseModel):
    """A harvestable instrument and its tax policy."""

    name: str
    harvest: int = 0  # Minimum holding period in days, <= 0 disables harvesting
    grandfather: str = ""  # YYYY-MM-DD

    _grandfather_date: Optional[datetime.date] = PrivateAttr(default=None)

    def model_post_init(self, __context: Any) -> None:
        self._grandfather_date = parse_grandfather_date(self.grandfather)

    @property
    def grandfather_date(self) -> Optional[datetime.date]:
        return self._grandfather_date


class Price(BaseModel):
    """Unit price of a commodity. A missing price is the zero sentinel (value 0, no date)."""

    commodity: str
    value: Decimal = Decimal(0)
    date: Optional[datetime.date] = None

    @classmethod
    def zero(cls, commodity: str) -> "Price":
        return cls(commodity=commodity)

    @property
    def is_known(self) -> bool:
        return self.date is not None


class FYCapitalGain(BaseModel):
    """Realized gain aggregated over one fiscal year."""

    gain: Decimal = Decimal(0)
    units: Decimal = Decimal(0)
    purchase_price: Decimal = Decimal(0)
    sell_price: Decimal = Decimal(0)


class HarvestBreakdown(BaseModel):
    """One harvestable lot."""

    units: Decimal
    purchase_date: datetime.date
    purchase_price: Decimal  # Original cost of the remaining units
    current_price: Decimal  # Current valuation of the remaining units
    purchase_unit_price: Decimal
    grandfather_unit_price: Decimal
    unrealized_gain: Decimal
    taxable_unrealized_gain: Decimal


class Harvestable(BaseModel):
    """Snapshot of the units still held in one account."""

    total_units: Decimal = Decimal(0)
    harvestable_units: Decimal = Decimal(0)
    unrealized_gain: Decimal = Decimal(0)
    taxable_unrealized_gain: Decimal = Decimal(0)
    harvest_breakdown: list[HarvestBreakdown] = []
    current_unit_price: Decimal = Decimal(0)
    grandfather_unit_price: Decimal = Decimal(0)
    current_unit_date: Optional[datetime.date] = None


class CapitalGain(BaseModel):
    """Realized gains per fiscal year plus the harvestable snapshot for one account."""

    account: str
    commodity: str
    fy: dict[str, FYCapitalGain] = {}
    harvestable: Harvestable = Field(default_factory=Harvestable)
