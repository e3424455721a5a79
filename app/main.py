from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import get_settings
from app.infra.logging_config import LoggingConfig
from app.infra.redis_client import close_redis_client
from app.routers.chats_router import chats_router
from app.routers.consent_router import consent_router
from app.routers.system import router as system_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    close_redis_client()


def create_app(testing: bool = False) -> FastAPI:
    settings = get_settings()
    LoggingConfig(level="DEBUG" if testing else settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        lifespan=None if testing else lifespan,
    )
    app.include_router(chats_router)
    app.include_router(consent_router)
    app.include_router(system_router)
    return app


app = create_app()
