"""Service providers for the API.

The façades hold per-item generation state, so each is a process-wide
singleton. Tests swap them through ``app.dependency_overrides``.
"""
from functools import lru_cache
from typing import Annotated, TypeAlias

from fastapi import Depends

from staytrail.services.listing_service import ListingService, build_listing_service
from staytrail.services.reporting.financial_report import (
    FinancialReportFacade,
    build_financial_report_facade,
)
from staytrail.services.reporting.route_report import RouteReportFacade, build_route_report_facade


@lru_cache
def get_financial_report() -> FinancialReportFacade:
    return build_financial_report_facade()


@lru_cache
def get_route_report() -> RouteReportFacade:
    return build_route_report_facade()


@lru_cache
def get_listing_service() -> ListingService:
    return build_listing_service()


FinancialReportDep: TypeAlias = Annotated[FinancialReportFacade, Depends(get_financial_report)]
RouteReportDep: TypeAlias = Annotated[RouteReportFacade, Depends(get_route_report)]
ListingServiceDep: TypeAlias = Annotated[ListingService, Depends(get_listing_service)]
