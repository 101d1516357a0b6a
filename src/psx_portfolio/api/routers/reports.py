"""Realized P/L report endpoints."""

from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query

from psx_portfolio.api.deps import get_report_service
from psx_portfolio.api.schemas import (
    MonthlyPnLResponse,
    RealizedPnLListResponse,
    RealizedPnLResponse,
    ScriptPnLResponse,
    YearlyPnLResponse,
)
from psx_portfolio.domain.models import RealizedPnLFilter
from psx_portfolio.services import ReportService

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/realized-pnl", response_model=RealizedPnLListResponse)
def list_realized_pnl(
    symbol: Optional[str] = Query(None, description="Filter by symbol"),
    date_from: Optional[date] = Query(None, description="Inclusive start sell date"),
    date_to: Optional[date] = Query(None, description="Inclusive end sell date"),
    reports: ReportService = Depends(get_report_service),
) -> RealizedPnLListResponse:
    """Realized P/L history, newest sale first."""
    records = reports.list_realized_pnl(
        RealizedPnLFilter(symbol=symbol, date_from=date_from, date_to=date_to)
    )
    return RealizedPnLListResponse(
        records=[RealizedPnLResponse.model_validate(r) for r in records],
        total_realized_pnl=sum((r.realized_pnl for r in records), Decimal("0")),
    )


@router.get("/monthly", response_model=list[MonthlyPnLResponse])
def monthly_pnl(
    year: Optional[int] = Query(None, ge=1900, le=9999),
    reports: ReportService = Depends(get_report_service),
) -> list[MonthlyPnLResponse]:
    """Realized P/L per calendar month, oldest first."""
    return [MonthlyPnLResponse.model_validate(m) for m in reports.monthly_pnl(year)]


@router.get("/yearly/{year}", response_model=YearlyPnLResponse)
def yearly_pnl(
    year: int,
    reports: ReportService = Depends(get_report_service),
) -> YearlyPnLResponse:
    """Realized P/L, trade count and charges for one year."""
    return YearlyPnLResponse.model_validate(reports.yearly_pnl(year))


@router.get("/script-wise", response_model=list[ScriptPnLResponse])
def script_wise_pnl(
    reports: ReportService = Depends(get_report_service),
) -> list[ScriptPnLResponse]:
    """Lifetime figures per symbol."""
    return [ScriptPnLResponse.model_validate(s) for s in reports.script_wise_pnl()]
