"""Admin REST API: every endpoint requires the ADMIN role."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.bl_account.application.schemas import (
    BalanceOverrideRequest,
    PaymentConfigResponse,
    TransactionItem,
    TransactionListResponse,
)
from src.bl_account.application.service import LedgerService
from src.bl_account.domain.models import User
from src.bl_admin.application.schemas import (
    AdminUserItem,
    AlertItem,
    ConfigUpdateRequest,
    MetricsResponse,
)
from src.bl_admin.application.service import AdminService
from src.bl_alert.application.service import AlertService
from src.bl_common.database import StoreSession, get_store_session
from src.bl_common.enums import TransactionStatus, TransactionType
from src.bl_common.response import ApiResponse, respond
from src.bl_gateway.auth.dependencies import require_admin
from src.bl_pool.application.service import PoolService

router = APIRouter(prefix="/admin", tags=["admin"])

_admin = AdminService()
_ledger = LedgerService()
_alerts = AlertService()
_pools = PoolService()

AdminUser = Annotated[User, Depends(require_admin)]
Session = Annotated[StoreSession, Depends(get_store_session)]


@router.get("/metrics")
async def get_metrics(request: Request, admin: AdminUser, session: Session) -> ApiResponse:
    metrics = await _admin.get_metrics(session)
    return respond(request, MetricsResponse.from_domain(metrics).model_dump())


@router.get("/transactions")
async def list_all_transactions(
    request: Request,
    admin: AdminUser,
    session: Session,
    tx_status: TransactionStatus | None = Query(None, alias="status"),
    tx_type: TransactionType | None = Query(None, alias="type"),
) -> ApiResponse:
    txs = await _ledger.list_transactions(
        session,
        tx_type=tx_type.value if tx_type else None,
        status=tx_status.value if tx_status else None,
    )
    data = TransactionListResponse(items=[TransactionItem.from_domain(t) for t in txs])
    return respond(request, data.model_dump())


@router.post("/transactions/{tx_id}/approve")
async def approve_transaction(
    tx_id: str, request: Request, admin: AdminUser, session: Session
) -> ApiResponse:
    tx = await _ledger.approve(session, tx_id)
    return respond(request, TransactionItem.from_domain(tx).model_dump())


@router.post("/transactions/{tx_id}/reject")
async def reject_transaction(
    tx_id: str, request: Request, admin: AdminUser, session: Session
) -> ApiResponse:
    tx = await _ledger.reject(session, tx_id)
    return respond(request, TransactionItem.from_domain(tx).model_dump())


@router.get("/users")
async def list_users(request: Request, admin: AdminUser, session: Session) -> ApiResponse:
    users = await _admin.list_users(session)
    return respond(request, {"items": [AdminUserItem.from_domain(u).model_dump() for u in users]})


@router.put("/users/{user_id}/balances")
async def override_balances(
    user_id: str,
    body: BalanceOverrideRequest,
    request: Request,
    admin: AdminUser,
    session: Session,
) -> ApiResponse:
    user = await _ledger.override_balances(
        session, user_id, body.balance_cents, body.withdrawable_balance_cents
    )
    return respond(request, AdminUserItem.from_domain(user).model_dump(), "Balances updated")


@router.get("/alerts")
async def list_alerts(request: Request, admin: AdminUser, session: Session) -> ApiResponse:
    alerts = await _alerts.list_alerts(session)
    return respond(request, {"items": [AlertItem.from_domain(a).model_dump() for a in alerts]})


@router.delete("/alerts/{alert_id}")
async def dismiss_alert(
    alert_id: str, request: Request, admin: AdminUser, session: Session
) -> ApiResponse:
    await _alerts.dismiss(session, alert_id)
    return respond(request, None, "Alert dismissed")


@router.post("/scan")
async def run_scan(request: Request, admin: AdminUser, session: Session) -> ApiResponse:
    raised = await _pools.run_system_scan(session)
    return respond(request, {"alerts_raised": raised})


@router.get("/config")
async def get_config(request: Request, admin: AdminUser, session: Session) -> ApiResponse:
    config = await _admin.get_config(session)
    return respond(request, PaymentConfigResponse.from_domain(config).model_dump())


@router.put("/config")
async def save_config(
    body: ConfigUpdateRequest, request: Request, admin: AdminUser, session: Session
) -> ApiResponse:
    config = await _admin.save_config(session, body.payment_key, body.qr_image_ref)
    return respond(
        request, PaymentConfigResponse.from_domain(config).model_dump(), "Config saved"
    )
