"""Tests for PostingRepo — filtering and ordering of harvestable postings."""

from datetime import date
from decimal import Decimal

from taxharvest.db.repos.posting_repo import PostingRepo
from taxharvest.domain.models.gains import Posting


def _posting(account: str, commodity: str, qty: str, amount: str, on: date) -> Posting:
    return Posting(account=account, commodity=commodity, quantity=Decimal(qty), amount=Decimal(amount), date=on)


class TestHarvestablePostings:
    async def test_filters_accounts_and_commodities(self, session):
        repo = PostingRepo(session)
        await repo.add_many([
            _posting("Assets:Equity:NIFTY", "NIFTY", "10", "1000", date(2020, 1, 1)),
            _posting("Income:Dividend", "NIFTY", "-1", "-100", date(2020, 2, 1)),
            _posting("Assets:Checking", "INR", "500", "500", date(2020, 3, 1)),
        ])

        postings = await repo.harvestable_postings(["NIFTY"])

        assert len(postings) == 1
        assert postings[0].account == "Assets:Equity:NIFTY"
        assert postings[0].quantity == Decimal("10")
        assert postings[0].amount == Decimal("1000")
        assert postings[0].date == date(2020, 1, 1)

    async def test_ordered_by_date_then_insertion(self, session):
        repo = PostingRepo(session)
        await repo.add_many([
            _posting("Assets:Equity:NIFTY", "NIFTY", "2", "200", date(2021, 1, 1)),
            _posting("Assets:Equity:NIFTY", "NIFTY", "1", "100", date(2020, 1, 1)),
            _posting("Assets:Equity:NIFTY", "NIFTY", "-1", "-150", date(2021, 1, 1)),
        ])

        postings = await repo.harvestable_postings(["NIFTY"])

        assert [p.quantity for p in postings] == [Decimal("1"), Decimal("2"), Decimal("-1")]

    async def test_custom_prefix(self, session):
        repo = PostingRepo(session)
        await repo.add_many([
            _posting("Assets:Equity:NIFTY", "NIFTY", "1", "100", date(2020, 1, 1)),
            _posting("Broker:NIFTY", "NIFTY", "2", "200", date(2020, 1, 2)),
        ])

        postings = await repo.harvestable_postings(["NIFTY"], account_prefix="Broker:")

        assert [p.account for p in postings] == ["Broker:NIFTY"]

    async def test_no_commodities(self, session):
        repo = PostingRepo(session)
        await repo.add_many([_posting("Assets:Equity:NIFTY", "NIFTY", "1", "100", date(2020, 1, 1))])
        assert await repo.harvestable_postings([]) == []


class TestDecimalStorage:
    async def test_fractional_quantities_round_trip_exactly(self, session):
        repo = PostingRepo(session)
        await repo.add_many([
            _posting("Assets:X", "BTC", "0.3", "9000.30", date(2020, 1, 1)),
            _posting("Assets:X", "BTC", "-0.1", "-3500.10", date(2021, 1, 1)),
            _posting("Assets:X", "BTC", "-0.2", "-7000.20", date(2022, 1, 1)),
        ])

        postings = await repo.harvestable_postings(["BTC"])

        assert [p.quantity for p in postings] == [Decimal("0.3"), Decimal("-0.1"), Decimal("-0.2")]
        assert [p.amount for p in postings] == [Decimal("9000.30"), Decimal("-3500.10"), Decimal("-7000.20")]
        assert sum(p.quantity for p in postings) == 0
