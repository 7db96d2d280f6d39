"""
Crowdfund Backend - FastAPI Application
Main entry point with all routes configured.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from crowdfund.config import Settings, settings as default_settings
from crowdfund.core.exceptions import CrowdfundException, UnauthorizedError
from crowdfund.core.logging import setup_logging
from crowdfund.database import Database
from crowdfund.schemas.common import ErrorResponse, HealthResponse
from crowdfund.repositories.notification_repo import NotificationRepository
from crowdfund.services.notification_dispatcher import NotificationDispatcher
from crowdfund.services.notification_service import NotificationService

# Import all API routers
from crowdfund.api import campaigns, donations, notifications, subscriptions, wallet

# Import models to ensure they are registered with SQLModel
from crowdfund.models import (
    User, Campaign, Donation, Notification, NotificationMembership, Subscription,
    Wallet, WalletTransaction
)

logger = logging.getLogger(__name__)

VERSION = "1.0.0"

ERROR_RESPONSES = {
    code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 500, 503)
}


def build_dispatcher(db: Database, settings: Settings) -> NotificationDispatcher:
    """Dispatcher whose jobs each run in a fresh session of their own."""

    @asynccontextmanager
    async def notification_scope():
        async with db.session() as session:
            yield NotificationService(NotificationRepository(session))

    return NotificationDispatcher(
        notification_scope,
        max_size=settings.NOTIFICATION_QUEUE_SIZE,
        max_retries=settings.NOTIFICATION_MAX_RETRIES,
        retry_delay=settings.NOTIFICATION_RETRY_DELAY,
    )


async def crowdfund_exception_handler(request: Request, exc: CrowdfundException):
    headers = None
    if isinstance(exc, UnauthorizedError):
        headers = {"WWW-Authenticate": "Bearer"}
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else first.get("msg", message)
    return JSONResponse(status_code=400, content={"error": message})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown events."""
        setup_logging(settings.LOG_LEVEL)

        # Startup
        db = Database(settings)
        await db.open()
        dispatcher = build_dispatcher(db, settings)
        dispatcher.start()
        app.state.db = db
        app.state.dispatcher = dispatcher

        yield

        # Shutdown: let pending notifications land before the pool goes away
        await dispatcher.stop()
        await db.close()

    app = FastAPI(
        title="Crowdfund API",
        description="Campaigns, donations and notifications for a donation platform",
        version=VERSION,
        lifespan=lifespan
    )

    # CORS Configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CrowdfundException, crowdfund_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Include all routers
    app.include_router(campaigns.router, responses=ERROR_RESPONSES)
    app.include_router(donations.router, responses=ERROR_RESPONSES)
    app.include_router(notifications.router, responses=ERROR_RESPONSES)
    app.include_router(subscriptions.router, responses=ERROR_RESPONSES)
    app.include_router(wallet.router, responses=ERROR_RESPONSES)

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {
            "message": "Crowdfund API is running",
            "version": VERSION,
            "docs": "/docs"
        }

    @app.get("/health", response_model=HealthResponse)
    async def health():
        """Detailed health check."""
        return HealthResponse(status="healthy", version=VERSION)

    return app


app = create_app()
