from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from sqlalchemy.engine import Engine

from sampler.infra.settings import PlatformSettings, load_platform_settings
from sampler.providers.push.base import PushSender
from sampler.providers.push.platform import PlatformPushSender


def get_engine(request: Request) -> Engine:
    engine = getattr(request.app.state, "db_engine", None)
    if engine is None:
        raise HTTPException(status_code=500, detail="Database engine not configured")
    return engine


def get_platform_settings(request: Request) -> PlatformSettings:
    return load_platform_settings(request.headers)


def get_push_sender(settings: PlatformSettings = Depends(get_platform_settings)) -> PushSender:
    return PlatformPushSender(settings)
