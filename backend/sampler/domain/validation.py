from __future__ import annotations

import math
from typing import Any, Optional

from .errors import ValidationError
from .models import LocationQuery

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

STATISTICS_PAGES = ("dashboard", "clients", "users", "notifications", "trivia")


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def _coerce_int(value: Any) -> Optional[int]:
    """Integral value of ``value`` or ``None``; numeric strings are accepted."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return None
        return int(value)
    if isinstance(value, int):
        return value
    return None


def _require_body(body: Any) -> dict:
    if not isinstance(body, dict):
        raise ValidationError("Request body is required")
    return body


def validate_location_query(body: Any) -> LocationQuery:
    body = _require_body(body)
    latitude = body.get("latitude")
    longitude = body.get("longitude")
    if not _is_number(latitude):
        raise ValidationError("latitude must be a valid number")
    if not _is_number(longitude):
        raise ValidationError("longitude must be a valid number")
    if latitude < -90 or latitude > 90:
        raise ValidationError("latitude must be between -90 and 90")
    if longitude < -180 or longitude > 180:
        raise ValidationError("longitude must be between -180 and 180")

    page = _coerce_int(body["page"]) if "page" in body else DEFAULT_PAGE
    if page is None or page < 1:
        raise ValidationError("page must be a positive integer")
    page_size = _coerce_int(body["pageSize"]) if "pageSize" in body else DEFAULT_PAGE_SIZE
    if page_size is None or page_size < 1 or page_size > MAX_PAGE_SIZE:
        raise ValidationError(f"pageSize must be a positive integer between 1 and {MAX_PAGE_SIZE}")

    return LocationQuery(latitude=latitude, longitude=longitude, page=page, page_size=page_size)


def validate_notification_request(body: Any) -> str:
    body = _require_body(body)
    notification_id = body.get("notificationId")
    if not notification_id or not isinstance(notification_id, str):
        raise ValidationError("notificationId is required and must be a string")
    return notification_id


def validate_statistics_page(body: Any) -> str:
    if not isinstance(body, dict) or not body.get("page"):
        raise ValidationError(
            "page parameter is required. Valid values: " + ", ".join(STATISTICS_PAGES)
        )
    page = body["page"]
    if page not in STATISTICS_PAGES:
        raise ValidationError("Invalid page parameter. Valid values: " + ", ".join(STATISTICS_PAGES))
    return page


def require_string(body: Any, key: str) -> str:
    body = _require_body(body)
    value = body.get(key)
    if not value or not isinstance(value, str):
        raise ValidationError(f"{key} is required and must be a string")
    return value


def require_answer_index(body: Any) -> int:
    body = _require_body(body)
    value = body.get("answerIndex")
    index = None if value is None else _coerce_int(value)
    if index is None:
        raise ValidationError("answerIndex is required and must be an integer")
    return index
