"""Money, percentage and date formatting for generated documents.

Usage
-----
    from staytrail.utils.formatting import fmt_money, fmt_date, fmt_percent

    fmt_money(Decimal("116"))          # "116.00"
    fmt_percent(Decimal("0.16"))       # "16"
    fmt_date(date(2025, 3, 7))         # "07/03/2025"
"""

from __future__ import annotations

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def to_cents(amount: Decimal | int | float | str) -> Decimal:
    """Quantize to two decimals, rounding half away from zero."""
    return Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)


def fmt_money(amount: Decimal | int | float | str) -> str:
    """Fixed two-decimal amount without currency symbol or grouping: ``1234.50``."""
    return f"{to_cents(amount):f}"


def fmt_percent(rate: Decimal) -> str:
    """Render a fraction as a percentage without trailing zeros (0.075 -> ``7.5``)."""
    normalized = (Decimal(str(rate)) * 100).normalize()
    if normalized == normalized.to_integral():
        normalized = normalized.quantize(Decimal("1"))

    text = format(normalized, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def fmt_date(value: dt.date | dt.datetime) -> str:
    """Day/month/year, zero padded: ``07/03/2025``."""
    return value.strftime("%d/%m/%Y")


def fmt_number(value: float) -> str:
    """Plain number the way a JS template literal prints it (10.0 -> ``10``)."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def fmt_duration(minutes: int | None) -> str:
    """Hours and minutes (``2h 5m``, ``45m``); absent or zero durations are ``N/A``."""
    if not minutes:
        return "N/A"
    hours, mins = divmod(int(minutes), 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"
