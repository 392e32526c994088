"""Report computation and the façades that drive document generation."""
from .aggregation import aggregate_bookings
from .financial_report import FinancialReportFacade, GenerationState
from .invoice_builder import build_invoice_data
from .route_report import RouteReportFacade

__all__ = [
    "aggregate_bookings",
    "build_invoice_data",
    "FinancialReportFacade",
    "GenerationState",
    "RouteReportFacade",
]
