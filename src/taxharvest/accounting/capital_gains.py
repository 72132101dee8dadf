"""Capital gains per account: FIFO realized gains plus harvestable lots."""

import logging
from collections import Counter
from datetime import date
from functools import partial
from typing import Callable, Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from taxharvest.accounting.fifo import match_lots
from taxharvest.accounting.fiscal_year import fiscal_year as default_fiscal_year
from taxharvest.accounting.harvest import analyze_harvest
from taxharvest.config import Settings, settings as default_settings
from taxharvest.db.repos.posting_repo import PostingRepo
from taxharvest.domain.models.gains import CapitalGain, Commodity, Posting, Price
from taxharvest.exceptions import ResultKeyCollisionError
from taxharvest.infra.price.service import PriceService

logger = logging.getLogger(__name__)

# commodity name -> (current price, grandfather price or None)
PriceTable = dict[str, tuple[Price, Optional[Price]]]


def compute_capital_gains(
    account: str,
    commodity: Commodity,
    postings: list[Posting],
    current_price: Price,
    grandfather_price: Optional[Price],
    today: date,
    fiscal_year: Callable[[date], str] = default_fiscal_year,
) -> CapitalGain:
    """Realized gains by fiscal year and the harvestable snapshot for one account and commodity."""
    fy, open_lots = match_lots(postings, fiscal_year=fiscal_year)
    harvestable = analyze_harvest(open_lots, commodity, current_price, grandfather_price, today)
    return CapitalGain(account=account, commodity=commodity.name, fy=fy, harvestable=harvestable)


def group_postings(postings: Iterable[Posting]) -> dict[tuple[str, str], list[Posting]]:
    """Group by (account, commodity), keeping input order within and between groups."""
    groups: dict[tuple[str, str], list[Posting]] = {}
    for p in postings:
        groups.setdefault((p.account, p.commodity), []).append(p)
    return groups


def capital_gains_by_account(
    postings: Iterable[Posting],
    commodities: Iterable[Commodity],
    prices: PriceTable,
    today: date,
    fiscal_year: Callable[[date], str] = default_fiscal_year,
) -> dict[str, CapitalGain]:
    """Compute capital gains for every account holding a harvestable commodity.

    Results are keyed by account, or by "<account>:<commodity>" when one
    account holds several harvestable commodities.

    Raises:
        ResultKeyCollisionError: two groups would share a result key, e.g.
            NIFTY held in "Assets:Broker" next to an "Assets:Broker:NIFTY" account.
    """
    harvestable = {c.name: c for c in commodities if c.harvest > 0}
    groups = group_postings(p for p in postings if p.commodity in harvestable)
    per_account = Counter(account for account, _ in groups)
    for account, count in per_account.items():
        if count > 1:
            logger.warning("Account %s holds %d harvestable commodities", account, count)

    keys: dict[str, tuple[str, str]] = {}
    for account, name in groups:
        key = account if per_account[account] == 1 else f"{account}:{name}"
        if key in keys:
            raise ResultKeyCollisionError(key, keys[key], (account, name))
        keys[key] = (account, name)

    results: dict[str, CapitalGain] = {}
    for key, (account, name) in keys.items():
        current_price, grandfather_price = prices.get(name, (Price.zero(name), None))
        results[key] = compute_capital_gains(
            account,
            harvestable[name],
            groups[(account, name)],
            current_price,
            grandfather_price,
            today,
            fiscal_year=fiscal_year,
        )
    return results


class CapitalGainsEngine:
    """Load postings and prices, then compute capital gains for every account."""

    def __init__(
        self,
        session: AsyncSession,
        price_service: Optional[PriceService] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._session = session
        self._price_service = price_service or PriceService(session)
        self._settings = settings or default_settings

    async def calculate(
        self,
        today: date,
        commodities: Optional[list[Commodity]] = None,
    ) -> dict[str, CapitalGain]:
        """Run the harvest computation as of ``today``."""
        if commodities is None:
            commodities = self._settings.commodities
        harvestable = [c for c in commodities if c.harvest > 0]

        # 1. Load postings of harvestable commodities, oldest first
        repo = PostingRepo(self._session)
        postings = await repo.harvestable_postings(
            [c.name for c in harvestable],
            account_prefix=self._settings.account_prefix,
        )

        # 2. Resolve prices once per commodity
        prices = await self._load_prices(harvestable, today)

        # 3. FIFO + harvest per account
        results = capital_gains_by_account(
            postings,
            harvestable,
            prices,
            today,
            fiscal_year=partial(
                default_fiscal_year,
                starting_month=self._settings.financial_year_starting_month,
            ),
        )
        logger.info("Capital gains computed for %d accounts from %d postings", len(results), len(postings))
        return results

    async def _load_prices(self, commodities: list[Commodity], today: date) -> PriceTable:
        prices: PriceTable = {}
        for commodity in commodities:
            current = await self._price_service.get_unit_price(commodity.name, today)
            grandfather = None
            grandfather_date = commodity.grandfather_date
            if grandfather_date is not None:
                grandfather = await self._price_service.get_unit_price(commodity.name, grandfather_date)
            prices[commodity.name] = (current, grandfather)
        return prices
