from datetime import datetime, timezone

import pytest

from sampler.services.statistics import StatisticsService

NOW = datetime(2026, 10, 14, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def service(engine):
    return StatisticsService(engine)


def test_dashboard_on_empty_store(service):
    result = service.get_statistics("dashboard", now=NOW)
    assert result["totalUsers"] == 0
    assert result["averagePPU"] == 0
    assert result["totalPointsAwarded"] == 0
    assert result["totalClientsBrandsChange"] == 0
    assert result["reviewsChange"] == 0


def test_dashboard_totals_and_changes(service, add_client, add_profile, add_event, add_review, add_check_in):
    add_client(id="old", created_at=datetime(2026, 8, 2))
    add_client(id="new", created_at=datetime(2026, 10, 3))
    add_profile(id="u1", created_at=datetime(2026, 9, 1))
    add_profile(id="u2", created_at=datetime(2026, 10, 2))
    add_profile(id="u3", created_at=datetime(2026, 10, 5))
    add_event(id="e1", date=datetime(2026, 10, 1), check_in_points=40)
    add_review(id="r1", points_earned=100)
    add_review(id="r2", points_earned=None)
    add_check_in(id="c1", points=25)
    add_check_in(id="c2", event_id="e1")
    add_check_in(id="c3", event_id="gone")
    add_check_in(id="c4")

    result = service.get_statistics("dashboard", now=NOW)

    assert result["totalClientsBrands"] == 2
    assert result["totalPointsAwarded"] == 165
    assert result["totalUsers"] == 3
    assert result["averagePPU"] == 55
    assert result["totalCheckins"] == 4
    assert result["reviews"] == 2
    # one client and one user existed at the end of last month
    assert result["totalClientsBrandsChange"] == 100
    assert result["totalUsersChange"] == 200


def test_clients_page_counts_this_month(service, add_client):
    add_client(id="a", created_at=datetime(2026, 9, 28))
    add_client(id="b", created_at=datetime(2026, 10, 2))
    add_client(id="c", created_at=datetime(2026, 10, 17))

    assert service.get_statistics("clients", now=NOW) == {"totalClients": 3, "newThisMonth": 2}


def test_users_page(service, add_profile, add_review):
    add_profile(id="u1", created_at=datetime(2026, 10, 11))
    add_profile(id="u2", created_at=datetime(2026, 10, 13), is_blocked=True)
    add_review(id="r1", points_earned=30)

    result = service.get_statistics("users", now=NOW)

    assert result == {"totalUsers": 2, "avgPoints": 15, "newThisWeek": 1, "usersInBlacklist": 1}


def test_notifications_page_uses_placeholder_rates(service, add_notification):
    add_notification(id="n1")
    add_notification(id="n2", status="Sent")

    result = service.get_statistics("notifications", now=NOW)

    assert result == {"totalSent": 2, "avgOpenRate": 65, "avgClickRate": 48, "scheduled": 2}


def test_trivia_page_buckets(service, add_trivia):
    add_trivia(id="future", start_date=datetime(2026, 11, 1), end_date=datetime(2026, 11, 2))
    add_trivia(id="running", start_date=datetime(2026, 10, 1), end_date=datetime(2026, 10, 30))
    add_trivia(id="done", start_date=datetime(2026, 9, 1), end_date=datetime(2026, 9, 2))

    result = service.get_statistics("trivia", now=NOW)

    assert result == {"totalQuizzes": 3, "scheduled": 1, "active": 1, "completed": 1}
