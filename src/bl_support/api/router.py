"""Support chat endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from src.bl_account.domain.models import User
from src.bl_admin.application.service import AdminService
from src.bl_common.database import StoreSession, get_store_session
from src.bl_common.response import ApiResponse, respond
from src.bl_gateway.auth.dependencies import get_current_user
from src.bl_support.assistant import SupportAssistant

router = APIRouter(prefix="/support", tags=["support"])

_admin = AdminService()


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=2000)


class ChatResponse(BaseModel):
    reply: str


def get_assistant() -> SupportAssistant:
    """FastAPI dependency (overridden in tests)."""
    return SupportAssistant()


@router.post("/chat")
async def chat(
    body: ChatRequest,
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[StoreSession, Depends(get_store_session)],
    assistant: Annotated[SupportAssistant, Depends(get_assistant)],
) -> ApiResponse:
    config = await _admin.get_config(session)
    # The completion call can take seconds; do not hold the writer lock across it
    await session.close()
    reply = await assistant.answer(body.message, config.payment_key)
    return respond(request, ChatResponse(reply=reply).model_dump())
