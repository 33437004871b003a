from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.engine import Engine

from sampler.api.deps import get_engine, get_platform_settings
from sampler.domain.validation import require_answer_index, require_string
from sampler.infra.db.trivia_repository import TriviaRepository
from sampler.infra.db.user_profiles_repository import UserProfilesRepository
from sampler.services.trivia import TriviaService

router = APIRouter(tags=["trivia"], dependencies=[Depends(get_platform_settings)])


def _service(engine: Engine) -> TriviaService:
    return TriviaService(TriviaRepository(engine), UserProfilesRepository(engine))


@router.post("/get-active-trivia")
def get_active_trivia(payload: Any = Body(None), engine: Engine = Depends(get_engine)):
    user_id = require_string(payload, "userId")
    return {"success": True, "trivia": _service(engine).get_active_trivia(user_id)}


@router.post("/submit-answer")
def submit_answer(payload: Any = Body(None), engine: Engine = Depends(get_engine)):
    user_id = require_string(payload, "userId")
    trivia_id = require_string(payload, "triviaId")
    answer_index = require_answer_index(payload)
    return _service(engine).submit_answer(user_id, trivia_id, answer_index)


@router.post("/dismiss-trivia")
def dismiss_trivia(payload: Any = Body(None), engine: Engine = Depends(get_engine)):
    user_id = require_string(payload, "userId")
    trivia_id = require_string(payload, "triviaId")
    return _service(engine).dismiss_trivia(user_id, trivia_id)
