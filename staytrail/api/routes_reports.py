from __future__ import annotations

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse

from staytrail.api.dependencies import FinancialReportDep, RouteReportDep
from staytrail.models.schemas.api import BookingDetailOut, FinancialReportOut
from staytrail.models.schemas.notices import Notice

router = APIRouter(prefix="/admin", tags=["reports"])


def notice_response(notice: Notice) -> JSONResponse:
    return JSONResponse(status_code=notice.status_code, content=notice.model_dump(mode="json"))


@router.get("/financial-report", response_model=FinancialReportOut)
async def financial_report(facade: FinancialReportDep):
    """Reload bookings and return revenue stats plus the booking list."""
    notice = await facade.load()
    if notice is not None:
        return notice_response(notice)
    return FinancialReportOut(
        stats=facade.stats,
        bookings=[
            BookingDetailOut.from_detail(detail, is_generating=facade.is_generating(detail.id))
            for detail in facade.details
        ],
    )


@router.post("/financial-report/bookings/{booking_id}/invoice", response_model=Notice)
async def generate_invoice(booking_id: str, facade: FinancialReportDep):
    if facade.is_generating(booking_id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="La factura de esta reserva ya se está generando",
        )
    if facade.find_detail(booking_id) is None:
        # The list may be stale or not loaded yet in this process
        await facade.load()

    notice = await facade.generate_invoice(booking_id)
    if notice is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="La factura de esta reserva ya se está generando",
        )
    return notice_response(notice)


@router.post("/routes/report", response_model=Notice)
async def generate_route_report(facade: RouteReportDep):
    notice = await facade.generate_report()
    if notice is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="El reporte de rutas ya se está generando",
        )
    return notice_response(notice)
