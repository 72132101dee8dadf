"""Fiscal year labels used to bucket realized gains."""

from datetime import date
from typing import Optional

from taxharvest.config import settings


def beginning_of_financial_year(day: date, starting_month: int) -> date:
    if not 1 <= starting_month <= 12:
        raise ValueError(f"Invalid financial year starting month: {starting_month}")
    year = day.year if day.month >= starting_month else day.year - 1
    return date(year, starting_month, 1)


def fiscal_year(day: date, starting_month: Optional[int] = None) -> str:
    """Label of the fiscal year containing ``day``, e.g. "2023 - 24"."""
    if starting_month is None:
        starting_month = settings.financial_year_starting_month
    start = beginning_of_financial_year(day, starting_month)
    return f"{start.year} - {(start.year + 1) % 100:02d}"
