import logging

from fastapi import APIRouter, Depends
from redis import Redis, RedisError

from app.config import get_settings
from app.routers.utils.dependencies import get_current_user, get_redis
from app.schemas.system import (
    AppGroup,
    ExternalServicesGroup,
    GeneralGroup,
    HealthResponse,
    RedisGroup,
    RetentionGroup,
    SystemSettingsGrouped,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/system",
    tags=["system"],
    responses={404: {"description": "Not found"}},
)


@router.get("/settings", response_model=SystemSettingsGrouped)
def get_system_settings(
    _current_user=Depends(get_current_user),
) -> SystemSettingsGrouped:
    """Return grouped, non-sensitive system configuration settings for troubleshooting."""
    s = get_settings()

    app_group = AppGroup(
        name=s.app_name,
        environment=s.environment,
        log_level=s.log_level,
        port=s.port,
    )

    general_group = GeneralGroup(
        is_production=s.is_production,
    )

    redis_group = RedisGroup(
        host=s.redis_host,
        port=s.redis_port,
        db=s.redis_db,
    )

    retention_group = RetentionGroup(
        message_retention_days=s.message_retention_days,
        chat_inactivity_days=s.chat_inactivity_days,
    )

    services_group = ExternalServicesGroup(
        avatar_api_url=s.avatar_api_url,
    )

    return SystemSettingsGrouped(
        app=app_group,
        general=general_group,
        redis=redis_group,
        retention=retention_group,
        services=services_group,
    )


@router.get("/health", response_model=HealthResponse)
def health(redis_client: Redis = Depends(get_redis)) -> HealthResponse:
    try:
        redis_ok = bool(redis_client.ping())
    except RedisError as e:
        logger.warning("Redis health check failed: %s", e)
        redis_ok = False
    return HealthResponse(status="ok" if redis_ok else "degraded", redis=redis_ok)
