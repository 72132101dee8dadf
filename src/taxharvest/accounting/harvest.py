"""Harvest eligibility of the lots still held after FIFO matching."""

from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from taxharvest.accounting.fifo import OpenLot
from taxharvest.domain.models.gains import Commodity, HarvestBreakdown, Harvestable, Price


def harvest_cutoff(today: date, harvest_days: int) -> date:
    """Lots bought strictly before this date have been held long enough to harvest."""
    return today - timedelta(days=harvest_days)


def analyze_harvest(
    open_lots: list[OpenLot],
    commodity: Commodity,
    current_price: Price,
    grandfather_price: Optional[Price],
    today: date,
) -> Harvestable:
    """Compute unrealized and taxable gains of the harvestable lots.

    A missing price arrives as the zero sentinel and is valued at zero.
    Lots bought before the commodity's grandfather date use the grandfather
    unit price as their taxable cost basis.
    """
    grandfather_date = commodity.grandfather_date
    grandfather_unit_price = Decimal(0)
    if grandfather_date is not None and grandfather_price is not None:
        grandfather_unit_price = grandfather_price.value

    harvestable = Harvestable(
        harvest_breakdown=[],
        current_unit_price=current_price.value,
        current_unit_date=current_price.date,
        grandfather_unit_price=grandfather_unit_price,
    )

    cutoff = harvest_cutoff(today, commodity.harvest)
    for lot in open_lots:
        units = lot.remaining_quantity
        harvestable.total_units += units
        if lot.purchase_date >= cutoff:
            continue

        cost_basis = lot.cost_basis
        current_value = current_price.value * units
        gain = current_value - cost_basis
        taxable_gain = gain
        if grandfather_date is not None and lot.purchase_date < grandfather_date:
            taxable_gain = grandfather_unit_price * units - cost_basis

        harvestable.harvestable_units += units
        harvestable.unrealized_gain += gain
        harvestable.taxable_unrealized_gain += taxable_gain
        harvestable.harvest_breakdown.append(HarvestBreakdown(
            units=units,
            purchase_date=lot.purchase_date,
            purchase_price=cost_basis,
            current_price=current_value,
            purchase_unit_price=lot.cost_basis_per_unit,
            grandfather_unit_price=grandfather_unit_price,
            unrealized_gain=gain,
            taxable_unrealized_gain=taxable_gain,
        ))

    return harvestable
