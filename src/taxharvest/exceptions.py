"""Errors raised by capital gains computation."""

from datetime import date
from decimal import Decimal


class CapitalGainsError(Exception):
    """Base exception for capital gains errors."""


class LedgerIntegrityError(CapitalGainsError):
    """Raised when a disposal sells more units than are currently held."""

    def __init__(
        self,
        account: str,
        commodity: str,
        on: date,
        requested: Decimal,
        available: Decimal,
    ) -> None:
        self.account = account
        self.commodity = commodity
        self.date = on
        self.requested = requested
        self.available = available
        super().__init__(
            f"Cannot sell {requested} {commodity} from {account} on {on.isoformat()}: "
            f"only {available} held"
        )


class ResultKeyCollisionError(CapitalGainsError):
    """Raised when two (account, commodity) groups map to the same result key."""

    def __init__(self, key: str, first: tuple[str, str], second: tuple[str, str]) -> None:
        self.key = key
        self.groups = (first, second)
        super().__init__(
            f"Result key {key!r} is claimed by {first[1]} in {first[0]} "
            f"and {second[1]} in {second[0]}"
        )
