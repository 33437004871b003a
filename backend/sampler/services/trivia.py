from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sampler.domain.errors import ValidationError
from sampler.infra.db.common import to_utc_naive
from sampler.infra.db.trivia_repository import TriviaRepository
from sampler.infra.db.user_profiles_repository import UserProfilesRepository

logger = logging.getLogger(__name__)

ACTIVE_TRIVIA_LIMIT = 100
USER_RESPONSES_LIMIT = 500


class TriviaService:
    def __init__(self, trivia_repo: TriviaRepository, profiles_repo: UserProfilesRepository):
        self.trivia_repo = trivia_repo
        self.profiles_repo = profiles_repo

    def get_active_trivia(self, user_id: str, *, now: Optional[datetime] = None) -> List[dict]:
        now = now or datetime.now(timezone.utc)
        active = self.trivia_repo.list_active(now, limit=ACTIVE_TRIVIA_LIMIT)
        logger.info("Found %s active trivia questions", len(active))
        if not active:
            return []
        answered = self.trivia_repo.answered_trivia_ids(user_id, limit=USER_RESPONSES_LIMIT)
        unanswered = []
        for trivia in active:
            if trivia.id in answered or user_id in trivia.skipped_users:
                continue
            # correct_option_index stays server-side
            unanswered.append(
                {
                    "id": trivia.id,
                    "question": trivia.question,
                    "answers": trivia.answers,
                    "startDate": trivia.start_date.isoformat(),
                    "endDate": trivia.end_date.isoformat(),
                    "points": trivia.points,
                    "client": trivia.client_id,
                }
            )
        logger.info("Returning %s unanswered trivia questions", len(unanswered))
        return unanswered

    def submit_answer(
        self,
        user_id: str,
        trivia_id: str,
        answer_index: int,
        *,
        now: Optional[datetime] = None,
    ) -> dict:
        trivia = self.trivia_repo.get_trivia(trivia_id)
        if not trivia.is_active(to_utc_naive(now or datetime.now(timezone.utc))):
            raise ValidationError("This trivia question is not currently active")
        profile = self.profiles_repo.get_profile(user_id)
        if self.trivia_repo.has_response(user_id, trivia_id):
            raise ValidationError("You have already answered this trivia question")
        if answer_index < 0 or answer_index >= len(trivia.answers):
            raise ValidationError(
                f"Invalid answer index. Must be between 0 and {len(trivia.answers) - 1}"
            )

        is_correct = answer_index == trivia.correct_option_index
        self.trivia_repo.create_response(
            user_id=user_id,
            trivia_id=trivia_id,
            answer=trivia.answers[answer_index],
            answer_index=answer_index,
        )
        logger.info("Created trivia response for user %s, trivia %s, isCorrect: %s", user_id, trivia_id, is_correct)

        points = 0
        if is_correct:
            points = trivia.points
            self.profiles_repo.set_total_points(user_id, profile.total_points + points)
            logger.info("Awarded %s points to user %s", points, user_id)

        return {
            "success": True,
            "isCorrect": is_correct,
            "pointsAwarded": points,
            "message": (
                f"Correct! You earned {points} points."
                if is_correct
                else "Incorrect answer. Better luck next time!"
            ),
        }

    def dismiss_trivia(self, user_id: str, trivia_id: str) -> dict:
        self.profiles_repo.get_profile(user_id)
        trivia = self.trivia_repo.get_trivia(trivia_id)
        if user_id in trivia.skipped_users:
            logger.info("User %s already in skippedUsers for trivia %s, no update", user_id, trivia_id)
            return {"success": True}
        skips = trivia.skips + 1 if isinstance(trivia.skips, int) else None
        self.trivia_repo.update_skips(trivia_id, skipped_users=trivia.skipped_users + [user_id], skips=skips)
        logger.info("Added user %s to skippedUsers for trivia %s", user_id, trivia_id)
        return {"success": True}
