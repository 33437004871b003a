from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["system"])
fallback_router = APIRouter(tags=["system"])

ENDPOINTS = [
    "GET /ping",
    "POST /get-events-by-location",
    "POST /send-notification",
    "GET|POST /check-event-reminders",
    "GET /* (any other path runs the reminder check)",
    "POST /get-statistics",
    "POST /update-user-tier",
    "POST /get-active-trivia",
    "POST /submit-answer",
    "POST /dismiss-trivia",
]


@router.get("/ping", response_class=PlainTextResponse)
def ping():
    return "Pong"


@fallback_router.api_route(
    "/{path:path}",
    methods=["POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
def fallback(path: str):
    return {"name": "Sampler Functions API", "endpoints": ENDPOINTS}
