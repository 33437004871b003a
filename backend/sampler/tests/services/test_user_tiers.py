import pytest

from sampler.domain.errors import NotFoundError
from sampler.infra.db.user_profiles_repository import UserProfilesRepository
from sampler.services.user_tiers import UserTierService


@pytest.fixture()
def profiles(engine):
    return UserProfilesRepository(engine)


def test_update_user_sets_tier_name(profiles, add_profile):
    add_profile(id="u1", total_points=5200)

    result = UserTierService(profiles).update_user("u1")

    assert result == {
        "success": True,
        "userId": "u1",
        "totalPoints": 5200,
        "tierLevel": "SuperSampler",
        "tierNumber": 3,
    }
    assert profiles.get_profile("u1").tier_level == "SuperSampler"


def test_update_user_unknown(profiles):
    with pytest.raises(NotFoundError):
        UserTierService(profiles).update_user("ghost")


def test_update_all_only_touches_changed_profiles(profiles, add_profile):
    add_profile(id="u1", total_points=0, tier_level="NewbieSampler")
    add_profile(id="u2", total_points=1000, tier_level="NewbieSampler")
    add_profile(id="u3", total_points=30000)

    result = UserTierService(profiles).update_all(batch_size=2)

    assert result == {"success": True, "updatedCount": 2}
    assert [p.tier_level for p in profiles.list_profiles()] == ["NewbieSampler", "SampleFan", "VIS"]
