from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.engine import Engine

from sampler.api.deps import get_engine, get_platform_settings
from sampler.domain.errors import NotFoundError, ValidationError
from sampler.domain.validation import validate_statistics_page
from sampler.infra.db.user_profiles_repository import UserProfilesRepository
from sampler.services.statistics import StatisticsService
from sampler.services.user_tiers import UserTierService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["statistics"], dependencies=[Depends(get_platform_settings)])


@router.post("/get-statistics")
def get_statistics(payload: Any = Body(None), engine: Engine = Depends(get_engine)):
    page = validate_statistics_page(payload)
    logger.info("Fetching statistics for page: %s", page)
    statistics = StatisticsService(engine).get_statistics(page)
    return {"success": True, "page": page, "statistics": statistics}


@router.post("/update-user-tier")
def update_user_tier(payload: Any = Body(None), engine: Engine = Depends(get_engine)):
    service = UserTierService(UserProfilesRepository(engine))
    user_id = payload.get("userId") if isinstance(payload, dict) else None
    if not user_id:
        return service.update_all()
    try:
        return service.update_user(str(user_id))
    except NotFoundError as exc:
        raise ValidationError(exc.message) from exc
