"""Auth API router: register, login, refresh, logout, profile.

All endpoints return ApiResponse[T]. request_id is read from
request.state (injected by RequestLogMiddleware).
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, status

from config.settings import settings
from src.bl_account.domain.models import User
from src.bl_common.database import StoreSession, get_store_session
from src.bl_common.response import ApiResponse, respond
from src.bl_gateway.auth.dependencies import get_current_user, get_token_payload
from src.bl_gateway.user.schemas import (
    LoginRequest,
    LoginResponse,
    RefreshRequest,
    RefreshResponse,
    RegisterRequest,
    UpdateProfileRequest,
    UserInfo,
)
from src.bl_gateway.user.service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])
_service = UserService()


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse,
    summary="User registration",
)
async def register(
    request: Request,
    body: RegisterRequest,
    session: Annotated[StoreSession, Depends(get_store_session)],
) -> ApiResponse:
    user = await _service.register(
        session, body.name, str(body.email), body.password, body.whatsapp
    )
    return respond(
        request, UserInfo.from_domain(user).model_dump(), "User registered successfully"
    )


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    summary="User login",
)
async def login(
    request: Request,
    body: LoginRequest,
    session: Annotated[StoreSession, Depends(get_store_session)],
) -> ApiResponse:
    user, access_token, refresh_token = await _service.login(
        session, body.email, body.password
    )
    data = LoginResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="Bearer",
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
        user=UserInfo.from_domain(user),
    )
    return respond(request, data.model_dump(), "Login successful")


@router.post(
    "/refresh",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    summary="Refresh access token",
)
async def refresh_token(
    request: Request,
    body: RefreshRequest,
    session: Annotated[StoreSession, Depends(get_store_session)],
) -> ApiResponse:
    new_access_token = await _service.refresh(session, body.refresh_token)
    data = RefreshResponse(
        access_token=new_access_token,
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
    )
    return respond(request, data.model_dump(), "Token refreshed")


@router.post(
    "/logout",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    summary="End the current login session",
)
async def logout(
    request: Request,
    payload: Annotated[dict[str, Any], Depends(get_token_payload)],
    session: Annotated[StoreSession, Depends(get_store_session)],
) -> ApiResponse:
    await _service.logout(session, str(payload["sid"]))
    return respond(request, None, "Logged out")


@router.get("/me", response_model=ApiResponse, summary="Current user profile")
async def get_me(
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse:
    return respond(request, UserInfo.from_domain(current_user).model_dump())


@router.patch("/me", response_model=ApiResponse, summary="Update profile")
async def update_me(
    request: Request,
    body: UpdateProfileRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[StoreSession, Depends(get_store_session)],
) -> ApiResponse:
    user = await _service.update_profile(
        session, current_user.id, str(body.email), body.whatsapp, body.password
    )
    return respond(request, UserInfo.from_domain(user).model_dump(), "Profile updated")
