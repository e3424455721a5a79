"""Schemas for the system settings and health endpoints."""

from typing import Optional

from pydantic import BaseModel


class AppGroup(BaseModel):
    name: str
    environment: str
    log_level: str
    port: int


class GeneralGroup(BaseModel):
    is_production: bool


class RedisGroup(BaseModel):
    host: str
    port: int
    db: int


class RetentionGroup(BaseModel):
    message_retention_days: int
    chat_inactivity_days: int


class ExternalServicesGroup(BaseModel):
    avatar_api_url: Optional[str] = None


class SystemSettingsGrouped(BaseModel):
    app: AppGroup
    general: GeneralGroup
    redis: RedisGroup
    retention: RetentionGroup
    services: ExternalServicesGroup


class HealthResponse(BaseModel):
    status: str
    redis: bool
