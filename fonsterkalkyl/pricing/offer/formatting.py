from __future__ import annotations

from ..calculators.money import round_half_up


def format_thousands(amount: float) -> str:
    """12500.4 -> '12 500' (space as thousands separator, no decimals)."""
    n = round_half_up(amount)
    sign = "-" if n < 0 else ""
    return sign + f"{abs(n):,}".replace(",", " ")


def format_sek(amount: float) -> str:
    return f"{format_thousands(amount)} kr"
