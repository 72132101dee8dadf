from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taxharvest.db.models.posting import PostingRecord
from taxharvest.domain.models.gains import Posting


def _to_posting(record: PostingRecord) -> Posting:
    return Posting(
        account=record.account,
        commodity=record.commodity,
        quantity=record.quantity,
        amount=record.amount,
        date=record.date,
    )


class PostingRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def harvestable_postings(
        self,
        commodity_names: list[str],
        account_prefix: str = "Assets:",
    ) -> list[Posting]:
        """Postings of the given commodities in accounts under ``account_prefix``, oldest first."""
        if not commodity_names:
            return []
        result = await self._session.execute(
            select(PostingRecord)
            .where(
                PostingRecord.account.like(f"{account_prefix}%"),
                PostingRecord.commodity.in_(commodity_names),
            )
            .order_by(PostingRecord.date, PostingRecord.id)
        )
        return [_to_posting(r) for r in result.scalars().all()]

    async def add_many(self, postings: Iterable[Posting]) -> None:
        for p in postings:
            self._session.add(PostingRecord(
                account=p.account,
                commodity=p.commodity,
                quantity=p.quantity,
                amount=p.amount,
                date=p.date,
            ))
        await self._session.flush()
