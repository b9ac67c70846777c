from __future__ import annotations

import math
from typing import Any, Optional


# =========================
# Loose numeric parsing (whatever ended up in the sheet)
# =========================


def to_str(v: Any) -> str:
    if v is None:
        return ""
    return str(v).strip()


def to_number_loose(v: Any) -> Optional[float]:
    """
    Parse a sheet cell to float.
    - accepts int/float and numeric strings, "1,05" == "1.05"
    - empty / None -> None (field absent)
    - bool, NaN, inf and anything unparseable -> None
    """
    if isinstance(v, bool):
        return None

    if isinstance(v, (int, float)):
        n = float(v)
        return n if math.isfinite(n) else None

    s = to_str(v)
    if s == "" or "_" in s:
        return None

    try:
        n = float(s.replace(",", "."))
    except ValueError:
        return None

    return n if math.isfinite(n) else None


def to_int_loose(v: Any) -> Optional[int]:
    n = to_number_loose(v)
    if n is None:
        return None
    return int(n)


# =========================
# Percent <-> multiplier
# =========================


def to_multiplier(v: Any) -> Optional[float]:
    """
    Interpret a percentage-like sheet value as a multiplier.

    Decision table (checked in this order):
      0             -> 1.0          (0 %)
      |n| >= 3      -> 1 + n/100    (15 -> 1.15, -10 -> 0.90, 152 -> 2.52)
      0 < n < 0.5   -> 1 + n        (0.05 -> 1.05, fractional percent)
      otherwise     -> n            (already a multiplier, 1.05 -> 1.05)
    """
    n = to_number_loose(v)
    if n is None:
        return None
    if n == 0:
        return 1.0
    if abs(n) >= 3:
        return 1 + n / 100
    if 0 < n < 0.5:
        return 1 + n
    return n


def to_vat_rate(v: Any) -> Optional[float]:
    """Sheet stores 25 for 25 %; values <= 1 are already fractions."""
    n = to_number_loose(v)
    if n is None:
        return None
    return n / 100 if n > 1 else n


def multiplier_to_percent(v: Any) -> Optional[float]:
    """Admin display: 1.15 -> 15.0, 15 -> 15.0, 0.05 -> 5.0."""
    m = to_multiplier(v)
    if m is None:
        return None
    return round((m - 1) * 100, 2)


def percent_to_multiplier(pct: Any) -> Optional[float]:
    n = to_number_loose(pct)
    if n is None:
        return None
    return 1 + n / 100


def multiplier_to_cell(m: float) -> float:
    """
    Sheet value that to_multiplier() reads back as `m`.

    [0.5, 3) is written as the multiplier itself; anything else as a percent
    (3.5 -> 250, 0.3 -> -70), which always lands in the |n| >= 3 branch.
    """
    if 0.5 <= m < 3:
        return m
    return (m - 1) * 100
