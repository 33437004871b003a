import pytest

from sampler.domain.geo import haversine_km


def test_identical_points_are_zero():
    assert haversine_km(30.2672, -97.7431, 30.2672, -97.7431) == 0


def test_distance_is_symmetric():
    austin = (30.2672, -97.7431)
    dallas = (32.7767, -96.7970)
    assert haversine_km(*austin, *dallas) == pytest.approx(haversine_km(*dallas, *austin))


def test_quarter_of_equator():
    assert haversine_km(0, 0, 0, 90) == pytest.approx(10007.5, abs=0.5)


def test_known_city_pair():
    # Austin -> Dallas is roughly 293 km as the crow flies
    assert haversine_km(30.2672, -97.7431, 32.7767, -96.7970) == pytest.approx(293, abs=5)
