import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.auth import AuthGate
from app.config import Settings, get_settings
from app.database import Base, build_engine, build_session_factory
from app.errors import register_exception_handlers
from app.routes.articles import router as articles_router
from app.routes.auth import router as auth_router

logger = logging.getLogger(__name__)


def create_app(settings: Settings) -> FastAPI:
    """
    Build the API from explicit settings.
    The engine, session factory and AuthGate live on app.state; nothing is read from globals at request time.
    """
    engine = build_engine(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # --- Startup ---
        for name in settings.insecure_defaults():
            logger.warning(f"'{name}' is using its development default: set it before deploying")

        logger.info("Creating database tables if they don't exist...")
        Base.metadata.create_all(bind=engine)

        yield

        # --- Shutdown ---
        logger.info("Disposing database engine...")
        engine.dispose()

    app = FastAPI(
        title=settings.app_title,
        description="Blog articles with single-password admin authentication.",
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.state.session_factory = build_session_factory(engine)
    app.state.auth_gate = AuthGate(
        secret=settings.jwt_secret,
        admin_password=settings.admin_password,
        token_ttl=timedelta(hours=settings.token_ttl_hours),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(articles_router, prefix="/api")
    app.include_router(auth_router, prefix="/api")
    return app


settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Server running on port {settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)
