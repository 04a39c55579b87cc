"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.bl_account.api.router import router as account_router
from src.bl_admin.api.router import router as admin_router
from src.bl_alert.application.scanner import PeriodicScanner
from src.bl_common.database import session_factory, store
from src.bl_common.errors import AppError
from src.bl_common.redis_client import close_redis
from src.bl_common.response import error_response
from src.bl_gateway.api.router import router as auth_router
from src.bl_gateway.middleware.request_log import RequestLogMiddleware
from src.bl_gateway.user.service import UserService
from src.bl_pool.api.router import router as pool_router
from src.bl_pool.application.service import PoolService
from src.bl_support.api.router import router as support_router

logger = logging.getLogger(__name__)


async def seed_admin_account() -> None:
    if not (settings.ADMIN_SEED_EMAIL and settings.ADMIN_SEED_PASSWORD):
        return
    async with session_factory() as session:
        await UserService().seed_admin(
            session,
            settings.ADMIN_SEED_EMAIL,
            settings.ADMIN_SEED_PASSWORD,
            settings.ADMIN_SEED_NAME,
        )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify the store, seed the admin, start the scan. Shutdown: reverse."""
    # Startup
    await store.ping()
    await seed_admin_account()
    scanner = PeriodicScanner(
        session_factory,
        PoolService().run_system_scan,
        interval_seconds=settings.SCAN_INTERVAL_SECONDS,
    )
    scanner.start()
    yield
    # Shutdown
    await scanner.stop()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    if exc.http_status >= 500:
        logger.error("AppError %d: %s", exc.code, exc.message)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(auth_router, prefix="/api/v1")
app.include_router(account_router, prefix="/api/v1")
app.include_router(pool_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")
app.include_router(support_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
