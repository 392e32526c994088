"""Invoice field derivation.

Prices are stored tax-inclusive. The subtotal is backed out of the total and
rounded to cents (ROUND_HALF_UP); the tax amount is the remainder, so the two
always add back up to the total exactly.
"""
from __future__ import annotations

import datetime as dt
from decimal import Decimal

from staytrail.core.config import settings
from staytrail.models.schemas.reporting import BookingDetail, InvoiceData
from staytrail.utils.formatting import fmt_date, fmt_money, fmt_percent, to_cents
from staytrail.utils.id_generator import generate_invoice_number


def split_tax_inclusive(total: Decimal, tax_rate: Decimal) -> tuple[Decimal, Decimal]:
    """Return ``(subtotal, tax_amount)`` for a tax-inclusive ``total``.

    >>> split_tax_inclusive(Decimal("116.00"), Decimal("0.16"))
    (Decimal('100.00'), Decimal('16.00'))
    """
    gross = to_cents(total)
    subtotal = to_cents(gross / (Decimal("1") + tax_rate))
    return subtotal, gross - subtotal


def due_date_for(now: dt.datetime, due_days: int) -> dt.datetime:
    return now + dt.timedelta(days=due_days)


def build_invoice_data(
    detail: BookingDetail,
    *,
    now: dt.datetime,
    tax_rate: Decimal | None = None,
    due_days: int | None = None,
) -> InvoiceData:
    """Derive every invoice field for one booking.

    Args:
        detail: Resolved booking projection
        now: Issue time; drives invoice date, due date and number suffix
        tax_rate: Fraction, defaults to ``settings.TAX_RATE``
        due_days: Validity window, defaults to ``settings.INVOICE_DUE_DAYS``

    Returns:
        InvoiceData with all values formatted as strings (not escaped)
    """
    rate = settings.TAX_RATE if tax_rate is None else Decimal(str(tax_rate))
    days = settings.INVOICE_DUE_DAYS if due_days is None else due_days
    subtotal, tax_amount = split_tax_inclusive(detail.total_price, rate)
    status = detail.payment_status.value

    return InvoiceData(
        invoice_number=generate_invoice_number(detail.id, now),
        invoice_date=fmt_date(now),
        due_date=fmt_date(due_date_for(now, days)),
        user_name=detail.user_name,
        user_address=detail.user_address,
        user_email=detail.user_email,
        user_id=detail.user_id or "N/A",
        accommodation_name=detail.accommodation_name,
        check_in_date=fmt_date(detail.check_in),
        check_out_date=fmt_date(detail.check_out),
        guests=str(detail.guests),
        payment_status=status[:1].upper() + status[1:],
        total_price=fmt_money(detail.total_price),
        subtotal=fmt_money(subtotal),
        tax_rate=fmt_percent(rate),
        tax_amount=fmt_money(tax_amount),
        grand_total=fmt_money(detail.total_price),
    )
