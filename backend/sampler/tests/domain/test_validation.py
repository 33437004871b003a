import pytest

from sampler.domain.errors import ValidationError
from sampler.domain.validation import (
    require_answer_index,
    validate_location_query,
    validate_notification_request,
    validate_statistics_page,
)


def test_defaults_applied():
    query = validate_location_query({"latitude": 30.2, "longitude": -97.7})
    assert (query.page, query.page_size) == (1, 10)


def test_numeric_strings_are_coerced_for_paging():
    query = validate_location_query({"latitude": 0, "longitude": 0, "page": "2", "pageSize": 25.0})
    assert (query.page, query.page_size) == (2, 25)


@pytest.mark.parametrize(
    "body, message",
    [
        (None, "Request body is required"),
        ([30, -97], "Request body is required"),
        ({}, "latitude must be a valid number"),
        ({"latitude": "10", "longitude": 0}, "latitude must be a valid number"),
        ({"latitude": True, "longitude": 0}, "latitude must be a valid number"),
        ({"latitude": float("nan"), "longitude": 0}, "latitude must be a valid number"),
        ({"latitude": 0}, "longitude must be a valid number"),
        ({"latitude": 91, "longitude": 0}, "latitude must be between -90 and 90"),
        ({"latitude": 0, "longitude": -181}, "longitude must be between -180 and 180"),
        ({"latitude": 0, "longitude": 0, "page": 1.5}, "page must be a positive integer"),
        ({"latitude": 0, "longitude": 0, "page": 0}, "page must be a positive integer"),
        ({"latitude": 0, "longitude": 0, "pageSize": 0}, "pageSize must be a positive integer between 1 and 100"),
        ({"latitude": 0, "longitude": 0, "pageSize": 101}, "pageSize must be a positive integer between 1 and 100"),
    ],
)
def test_rejections(body, message):
    with pytest.raises(ValidationError) as exc:
        validate_location_query(body)
    assert exc.value.message == message


def test_checks_run_in_order():
    # both coordinates out of range: latitude is reported first
    with pytest.raises(ValidationError, match="latitude must be between"):
        validate_location_query({"latitude": 100, "longitude": 500, "pageSize": 0})


def test_notification_id_required():
    assert validate_notification_request({"notificationId": "n1"}) == "n1"
    with pytest.raises(ValidationError, match="notificationId is required"):
        validate_notification_request({"notificationId": 12})


def test_statistics_page_choices():
    assert validate_statistics_page({"page": "trivia"}) == "trivia"
    with pytest.raises(ValidationError, match="page parameter is required"):
        validate_statistics_page({})
    with pytest.raises(ValidationError, match="Invalid page parameter"):
        validate_statistics_page({"page": "reports"})


def test_answer_index_must_be_integral():
    assert require_answer_index({"answerIndex": 0}) == 0
    with pytest.raises(ValidationError):
        require_answer_index({"answerIndex": "first"})
