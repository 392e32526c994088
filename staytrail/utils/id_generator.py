"""Invoice number generation."""
from __future__ import annotations

import datetime as dt


def generate_invoice_number(record_id: str, now: dt.datetime) -> str:
    """Build ``INV-<id prefix>-<4 digit time suffix>``.

    Uniqueness is best-effort: two records sharing an 8 character prefix and
    generated in the same 10 second window can collide.
    """
    millis = int(now.timestamp() * 1000)
    return f"INV-{record_id[:8]}-{millis % 10_000:04d}"
