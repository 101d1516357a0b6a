"""Portfolio (holdings) endpoints."""

from fastapi import APIRouter, Depends, Query

from psx_portfolio.api.deps import get_portfolio_engine, get_report_service
from psx_portfolio.api.schemas import (
    HoldingResponse,
    PortfolioSummaryResponse,
    RealizedPnLResponse,
    RebuildResponse,
    ScriptDetailsResponse,
    TransactionResponse,
)
from psx_portfolio.services import PortfolioEngine, ReportService

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("", response_model=PortfolioSummaryResponse)
def get_portfolio(
    include_closed: bool = Query(False, description="Also list fully sold positions"),
    portfolio: PortfolioEngine = Depends(get_portfolio_engine),
) -> PortfolioSummaryResponse:
    """Get holdings and portfolio totals."""
    summary = portfolio.get_portfolio_summary(include_closed=include_closed)
    return PortfolioSummaryResponse.model_validate(summary)


@router.post("/rebuild", response_model=RebuildResponse)
def rebuild_portfolio(
    portfolio: PortfolioEngine = Depends(get_portfolio_engine),
) -> RebuildResponse:
    """Rebuild every holding and P/L record from the ledger."""
    return RebuildResponse(rebuilt_symbols=portfolio.rebuild_all())


@router.get("/{symbol}", response_model=ScriptDetailsResponse)
def get_script(
    symbol: str,
    reports: ReportService = Depends(get_report_service),
) -> ScriptDetailsResponse:
    """Get one symbol's holding, transactions and realized P/L."""
    details = reports.get_script_details(symbol)
    return ScriptDetailsResponse(
        holding=HoldingResponse.model_validate(details.holding),
        transactions=[TransactionResponse.from_domain(t) for t in details.transactions],
        realized_pnl=[RealizedPnLResponse.model_validate(r) for r in details.realized_pnl],
    )
