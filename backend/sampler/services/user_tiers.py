from __future__ import annotations

import logging

from sampler.domain.stats import tier_from_points
from sampler.infra.db.user_profiles_repository import UserProfilesRepository

logger = logging.getLogger(__name__)

TIER_BATCH_SIZE = 100


class UserTierService:
    def __init__(self, profiles_repo: UserProfilesRepository):
        self.profiles_repo = profiles_repo

    def update_user(self, user_id: str) -> dict:
        profile = self.profiles_repo.get_profile(user_id)
        level, name = tier_from_points(profile.total_points)
        self.profiles_repo.update_tier(user_id, name)
        logger.info("Updated user %s to tier %s (%s points)", user_id, name, profile.total_points)
        return {
            "success": True,
            "userId": user_id,
            "totalPoints": profile.total_points,
            "tierLevel": name,
            "tierNumber": level,
        }

    def update_all(self, *, batch_size: int = TIER_BATCH_SIZE) -> dict:
        updated = 0
        offset = 0
        while True:
            batch = self.profiles_repo.list_profiles(limit=batch_size, offset=offset)
            if not batch:
                break
            for profile in batch:
                _, name = tier_from_points(profile.total_points)
                if (profile.tier_level or "") != name:
                    self.profiles_repo.update_tier(profile.id, name)
                    updated += 1
            offset += batch_size
            if len(batch) < batch_size:
                break
        logger.info("Updated tier for %s users", updated)
        return {"success": True, "updatedCount": updated}
