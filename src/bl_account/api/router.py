"""bl_account REST API: balances, deposit/withdraw requests, history, payment info."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status

from src.bl_account.application.schemas import (
    BalanceResponse,
    DepositRequest,
    PaymentConfigResponse,
    TransactionItem,
    TransactionListResponse,
    WithdrawRequest,
)
from src.bl_account.application.service import LedgerService
from src.bl_account.domain.models import User
from src.bl_admin.application.service import AdminService
from src.bl_common.database import StoreSession, get_store_session
from src.bl_common.enums import TransactionType
from src.bl_common.response import ApiResponse, respond
from src.bl_gateway.auth.dependencies import get_current_user, require_complete_profile

router = APIRouter(prefix="/account", tags=["account"])

_ledger = LedgerService()
_admin = AdminService()


@router.get("/balance")
async def get_balance(
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[StoreSession, Depends(get_store_session)],
    request: Request,
) -> ApiResponse:
    user = await _ledger.get_balance(session, current_user.id)
    return respond(request, BalanceResponse.from_domain(user).model_dump())


@router.post("/deposit", status_code=status.HTTP_201_CREATED)
async def deposit(
    body: DepositRequest,
    current_user: Annotated[User, Depends(require_complete_profile)],
    session: Annotated[StoreSession, Depends(get_store_session)],
    request: Request,
) -> ApiResponse:
    tx = await _ledger.request_deposit(
        session, current_user.id, body.amount_cents, body.receipt_ref
    )
    return respond(
        request, TransactionItem.from_domain(tx).model_dump(), "Deposit awaiting review"
    )


@router.post("/withdraw", status_code=status.HTTP_201_CREATED)
async def withdraw(
    body: WithdrawRequest,
    current_user: Annotated[User, Depends(require_complete_profile)],
    session: Annotated[StoreSession, Depends(get_store_session)],
    request: Request,
) -> ApiResponse:
    tx = await _ledger.request_withdrawal(session, current_user.id, body.amount_cents)
    return respond(
        request, TransactionItem.from_domain(tx).model_dump(), "Withdrawal awaiting review"
    )


@router.get("/transactions")
async def list_transactions(
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[StoreSession, Depends(get_store_session)],
    request: Request,
    tx_type: TransactionType | None = Query(None, alias="type", description="Filter by type"),
) -> ApiResponse:
    txs = await _ledger.list_transactions(
        session, current_user.id, tx_type.value if tx_type else None
    )
    data = TransactionListResponse(items=[TransactionItem.from_domain(t) for t in txs])
    return respond(request, data.model_dump())


@router.get("/payment-config")
async def get_payment_config(
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[StoreSession, Depends(get_store_session)],
    request: Request,
) -> ApiResponse:
    config = await _admin.get_config(session)
    return respond(request, PaymentConfigResponse.from_domain(config).model_dump())
