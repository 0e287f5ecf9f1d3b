# user_api/main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_api.api.api import api_router
from user_api.api.errors import register_exception_handlers
from user_api.api.middleware import RequestLoggingMiddleware
from user_api.core.config import Settings, get_settings
from user_api.core.i18n import Translator
from user_api.core.logging import setup_logging
from user_api.core.security import PasswordHasher, TokenService
from user_api.db.session import build_engine, build_session_factory

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting %s %s", app.title, app.version)
    yield
    app.state.engine.dispose()
    logger.info("Database engine disposed")


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    # Raises pydantic.ValidationError when required env vars are missing
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    if settings.uses_default_secret:
        logger.warning("JWT_SECRET is not set, tokens are signed with the default secret")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="API for managing users with JWT authentication",
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # ---------- SHARED STATE ----------
    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.tokens = TokenService(settings.jwt_secret, algorithm=settings.algorithm)
    app.state.translator = Translator(default_language=settings.default_language)

    # ---------- MIDDLEWARE ----------
    if settings.backend_cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.backend_cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.add_middleware(RequestLoggingMiddleware)

    # ---------- ERRORS ----------
    register_exception_handlers(app)

    # ---------- ROUTERS ----------
    app.include_router(api_router)

    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_application(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
