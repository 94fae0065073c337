"""
SupplyHub backend — application entry point.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import register_exception_handlers, register_middleware
from api.routes import router as api_router
from auth.routes import router as auth_router
from config.settings import config
from database.session import close_client, ensure_indexes, get_database
from utils.schemas import HealthResponse

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("pymongo", "motor", "asyncio"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="SupplyHub Backend",
        version="1.0.0",
        description="User auth and supply management over MongoDB.",
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(timestamp=datetime.now(timezone.utc))

    @app.on_event("startup")
    async def on_startup():
        logger.info("Connecting to MongoDB database %s…", config.mongodb_db)
        await ensure_indexes(get_database())
        logger.info("Application ready to accept requests.")

    @app.on_event("shutdown")
    async def on_shutdown():
        close_client()
        logger.info("MongoDB client closed.")

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
