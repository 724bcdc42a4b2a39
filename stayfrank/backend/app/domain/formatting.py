# app/domain/formatting.py
from __future__ import annotations


def format_currency(value: float) -> str:
    """Whole-dollar USD: 200000 -> '$200,000', -1500 -> '-$1,500'."""
    amount = round(float(value))
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,}"


def format_percentage(value: float, decimals: int = 1) -> str:
    return f"{value:.{decimals}f}%"
