"""
Task Manager API — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import register_exception_handlers, register_middleware
from api.routes import router as api_router
from auth.jwt import TokenCodec
from auth.routes import router as auth_router
from config.settings import Settings, config
from database.session import init_db
from tasks.routes import router as tasks_router
from utils.schemas import envelope

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("sqlalchemy.engine", "asyncio"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Ensuring database schema…")
    await init_db()
    logger.info("Application ready to accept requests.")
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or config

    # Fails fast when JWT_SECRET is missing.
    codec = TokenCodec(settings.jwt_secret, expiry_seconds=settings.jwt_expiry_seconds)

    app = FastAPI(
        title="Task Manager API",
        version="1.0.0",
        description="Personal task management with bearer-token auth.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.token_codec = codec

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router, prefix="/api/auth")
    app.include_router(tasks_router, prefix="/api/tasks")
    app.include_router(api_router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def root():
        return envelope(200, None, "API is running")

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
