"""bl_pool REST endpoints.

GET  /pools                   list, derived status, newest first
POST /pools                   create an OPEN pool
GET  /pools/bets/mine         the caller's bets
GET  /pools/{pool_id}         detail with bets and projected prize pool
POST /pools/{pool_id}/bets    place the caller's single bet
POST /pools/{pool_id}/settle  creator or admin declares the winner
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status

from src.bl_account.domain.models import User
from src.bl_common.database import StoreSession, get_store_session
from src.bl_common.enums import PoolStatus
from src.bl_common.response import ApiResponse, respond
from src.bl_gateway.auth.dependencies import get_current_user, require_complete_profile
from src.bl_pool.application.schemas import (
    BetItem,
    BetRequest,
    CreatePoolRequest,
    MyBetItem,
    MyBetListResponse,
    PoolDetail,
    PoolItem,
    PoolListResponse,
    SettleRequest,
    SettlementResponse,
)
from src.bl_pool.application.service import PoolService

router = APIRouter(prefix="/pools", tags=["pools"])

_service = PoolService()


@router.get("")
async def list_pools(
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[StoreSession, Depends(get_store_session)],
    pool_status: PoolStatus | None = Query(None, alias="status"),
    modality: str | None = Query(None),
) -> ApiResponse:
    pools = await _service.list_pools(
        session,
        status=pool_status.value if pool_status else None,
        modality=modality,
    )
    data = PoolListResponse(items=[PoolItem.from_domain(p) for p in pools])
    return respond(request, data.model_dump())


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_pool(
    request: Request,
    body: CreatePoolRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[StoreSession, Depends(get_store_session)],
) -> ApiResponse:
    pool = await _service.create_pool(
        session,
        current_user.id,
        body.name,
        body.modality,
        body.date_time,
        body.event_date_time,
        body.bet_amount_cents,
        body.options,
    )
    return respond(request, PoolItem.from_domain(pool).model_dump(), "Pool created")


@router.get("/bets/mine")
async def list_my_bets(
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[StoreSession, Depends(get_store_session)],
) -> ApiResponse:
    pairs = await _service.list_user_bets(session, current_user.id)
    items = [
        MyBetItem(
            bet=BetItem.from_domain(bet),
            pool=PoolItem.from_domain(pool),
            won=(
                bet.option_selected == pool.winner_option
                if pool.status == PoolStatus.FINISHED.value
                else None
            ),
        )
        for bet, pool in pairs
    ]
    return respond(request, MyBetListResponse(items=items).model_dump())


@router.get("/{pool_id}")
async def get_pool(
    pool_id: str,
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[StoreSession, Depends(get_store_session)],
) -> ApiResponse:
    pool, bets = await _service.get_pool_detail(session, pool_id)
    return respond(request, PoolDetail.from_domain(pool, bets).model_dump())


@router.post("/{pool_id}/bets", status_code=status.HTTP_201_CREATED)
async def place_bet(
    pool_id: str,
    body: BetRequest,
    request: Request,
    current_user: Annotated[User, Depends(require_complete_profile)],
    session: Annotated[StoreSession, Depends(get_store_session)],
) -> ApiResponse:
    bet = await _service.place_bet(session, current_user.id, pool_id, body.option)
    return respond(request, BetItem.from_domain(bet).model_dump(), "Bet placed")


@router.post("/{pool_id}/settle")
async def settle_pool(
    pool_id: str,
    body: SettleRequest,
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[StoreSession, Depends(get_store_session)],
) -> ApiResponse:
    plan = await _service.settle(session, current_user, pool_id, body.winner_option)
    if plan is None:
        pool, _ = await _service.get_pool_detail(session, pool_id)
        data = SettlementResponse(
            pool_id=pool_id,
            winner_option=pool.winner_option or body.winner_option,
            already_finished=True,
        )
        return respond(request, data.model_dump(), "Pool already finished")
    return respond(request, SettlementResponse.from_plan(plan).model_dump(), "Pool settled")
