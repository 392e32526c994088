"""Pydantic schemas.

Sub-modules:
- reporting: booking records, financial aggregates, invoice fields
- routes: route records for the route report
- notices: user-facing notices
- api: HTTP request/response bodies
"""
from .reporting import BookingDetail, FinancialStats, InvoiceData, RawBookingRecord
from .routes import RouteRecord
from .notices import Notice, NoticeLevel
from .api import AccommodationCreate, BookingDetailOut, FinancialReportOut

__all__ = [
    "RawBookingRecord", "FinancialStats", "BookingDetail", "InvoiceData",
    "RouteRecord", "Notice", "NoticeLevel",
    "AccommodationCreate", "BookingDetailOut", "FinancialReportOut",
]
