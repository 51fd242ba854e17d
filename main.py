from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notification_center.application.use_cases.notifications import NotificationManager
from notification_center.config import get_settings
from notification_center.infrastructure.database import SessionLocal, engine
from notification_center.infrastructure.repositories import NotificationRepository
from notification_center.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the notification tables at start-up and release the pool on shutdown."""

    session = SessionLocal()
    try:
        NotificationManager(NotificationRepository(session)).ensure_storage()
    finally:
        session.close()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    app = FastAPI(title="Notification Center", lifespan=lifespan)

    if settings.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_routes(app)
    return app


app = create_app()
