import random

from refollow.analysis.aggregation import aggregate, assemble, build_list
from refollow.models import FidSet, Profile


def test_not_following_back_is_following_minus_followers():
    result = aggregate(FidSet([5, 1, 3, 2]), FidSet([2, 9, 5]))

    assert list(result.not_following_back) == [1, 3]
    assert list(result.following) == [5, 1, 3, 2]
    assert list(result.followers) == [2, 9, 5]


def test_subset_and_disjoint_properties_hold_for_random_sets():
    rng = random.Random(42)
    for _ in range(50):
        following = FidSet(rng.sample(range(1, 60), rng.randint(0, 30)))
        followers = FidSet(rng.sample(range(1, 60), rng.randint(0, 30)))

        nfb = aggregate(following, followers).not_following_back

        assert all(fid in following for fid in nfb)
        assert not any(fid in followers for fid in nfb)


def test_aggregate_is_deterministic():
    first = aggregate([3, 1, 2], [2])
    second = aggregate([3, 1, 2], [2])
    assert list(first.not_following_back) == list(second.not_following_back) == [3, 1]


def test_hydration_set_puts_following_first_without_duplicates():
    result = aggregate([1, 2], [2, 3])
    assert list(result.hydration_set()) == [1, 2, 3]


def test_build_list_falls_back_to_bare_profiles():
    profiles = {2: Profile(fid=2, username="two")}

    listed = build_list([1, 2], profiles)

    assert listed == [Profile(fid=1), Profile(fid=2, username="two")]


def test_build_list_never_fails_on_empty_hydration():
    assert build_list(FidSet([4, 5]), {}) == [Profile(fid=4), Profile(fid=5)]


def test_assemble_payload_shape_omits_missing_fields():
    profiles = {1: Profile(fid=1, username="one", display_name="One", pfp_url="https://x/1")}

    payload = assemble(aggregate([1, 2], [1]), profiles).to_payload()

    assert payload == {
        "following": [
            {"fid": 1, "username": "one", "displayName": "One", "pfpUrl": "https://x/1"},
            {"fid": 2},
        ],
        "followers": [
            {"fid": 1, "username": "one", "displayName": "One", "pfpUrl": "https://x/1"},
        ],
        "notFollowingBack": [{"fid": 2}],
    }
