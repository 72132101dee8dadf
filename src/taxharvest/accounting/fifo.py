"""FIFO lot matching — pure functions, no DB dependency.

Disposals consume the oldest open acquisition lot first. Realized gains are
bucketed by the fiscal year of the disposal.
"""

from collections import deque
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable

from pydantic import BaseModel

from taxharvest.accounting.fiscal_year import fiscal_year as default_fiscal_year
from taxharvest.domain.models.gains import FYCapitalGain, Posting
from taxharvest.exceptions import LedgerIntegrityError


class OpenLot(BaseModel):
    """An unsold (or partially sold) acquisition."""

    posting: Posting
    remaining_quantity: Decimal
    cost_basis_per_unit: Decimal  # = posting.price, fixed at creation

    @classmethod
    def from_posting(cls, posting: Posting) -> "OpenLot":
        return cls(
            posting=posting,
            remaining_quantity=posting.quantity,
            cost_basis_per_unit=posting.price,
        )

    @property
    def purchase_date(self) -> date:
        return self.posting.date

    @property
    def cost_basis(self) -> Decimal:
        """Cost of the remaining units."""
        if self.remaining_quantity == self.posting.quantity:
            return self.posting.amount
        return self.remaining_quantity * self.cost_basis_per_unit


def match_lots(
    postings: Iterable[Posting],
    fiscal_year: Callable[[date], str] = default_fiscal_year,
) -> tuple[dict[str, FYCapitalGain], list[OpenLot]]:
    """Match disposals against acquisitions using FIFO for one account and commodity.

    Args:
        postings: Sorted by date, all for the same account and commodity.
        fiscal_year: Maps a disposal date to its fiscal year label.

    Returns:
        (realized gains keyed by fiscal year, remaining open lots in FIFO order)

    Raises:
        LedgerIntegrityError: a disposal sells more units than are held.
    """
    available: deque[OpenLot] = deque()
    gains: dict[str, FYCapitalGain] = {}
    held = Decimal(0)  # sum of remaining_quantity over available

    for posting in postings:
        if posting.quantity > 0:
            available.append(OpenLot.from_posting(posting))
            held += posting.quantity
            continue
        if posting.quantity == 0:
            continue

        to_match = -posting.quantity
        if to_match > held:
            raise LedgerIntegrityError(
                account=posting.account,
                commodity=posting.commodity,
                on=posting.date,
                requested=to_match,
                available=held,
            )

        held -= to_match
        purchase_price = Decimal(0)
        while to_match > 0:
            front = available[0]
            if front.remaining_quantity > to_match:
                purchase_price += to_match * front.cost_basis_per_unit
                front.remaining_quantity -= to_match
                to_match = Decimal(0)
            else:
                purchase_price += front.cost_basis
                to_match -= front.remaining_quantity
                available.popleft()

        sell_price = -posting.amount
        fy = gains.setdefault(fiscal_year(posting.date), FYCapitalGain())
        fy.gain += sell_price - purchase_price
        fy.units += -posting.quantity
        fy.purchase_price += purchase_price
        fy.sell_price += sell_price

    return gains, list(available)
