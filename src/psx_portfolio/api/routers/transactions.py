"""Transaction (ledger) endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from psx_portfolio.api.deps import get_ledger_service
from psx_portfolio.api.schemas import (
    RealizedPnLResponse,
    TransactionCreateRequest,
    TransactionDetailResponse,
    TransactionListResponse,
    TransactionResponse,
)
from psx_portfolio.config.settings import get_settings
from psx_portfolio.domain.models import TransactionFilter, TransactionType
from psx_portfolio.services import LedgerService, TransactionCreate

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(
    request: TransactionCreateRequest,
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """Record a BUY or SELL; charges are computed and frozen on the entry."""
    transaction = ledger.create_transaction(
        TransactionCreate(
            trade_date=request.trade_date,
            symbol=request.symbol,
            txn_type=request.txn_type,
            quantity=request.quantity,
            rate=request.rate,
        )
    )
    return TransactionResponse.from_domain(transaction)


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    symbol: Optional[str] = Query(None, description="Filter by symbol"),
    txn_type: Optional[TransactionType] = Query(None, description="BUY or SELL"),
    date_from: Optional[date] = Query(None, description="Inclusive start date"),
    date_to: Optional[date] = Query(None, description="Inclusive end date"),
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1, description="Page size (default from settings)"),
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionListResponse:
    """List transactions, newest first."""
    result = ledger.query_transactions(
        TransactionFilter(
            symbol=symbol,
            side=txn_type,
            date_from=date_from,
            date_to=date_to,
            page=page,
            limit=limit or get_settings().default_page_size,
        )
    )
    return TransactionListResponse(
        transactions=[TransactionResponse.from_domain(t) for t in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
        pages=result.pages,
    )


@router.get("/{txn_id}", response_model=TransactionDetailResponse)
def get_transaction(
    txn_id: int,
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionDetailResponse:
    """Get a transaction and, for a SELL, the P/L it realized."""
    detail = ledger.get_transaction(txn_id)
    base = TransactionResponse.from_domain(detail.transaction)
    realized = None
    if detail.realized_pnl is not None:
        realized = RealizedPnLResponse.model_validate(detail.realized_pnl)
    return TransactionDetailResponse(**base.model_dump(), realized_pnl=realized)


@router.delete("/{txn_id}", status_code=204)
def delete_transaction(
    txn_id: int,
    ledger: LedgerService = Depends(get_ledger_service),
) -> Response:
    """Delete a transaction and rebuild its symbol from the remaining history."""
    ledger.delete_transaction(txn_id)
    return Response(status_code=204)
