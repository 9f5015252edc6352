from refollow.upstream.decoding import (
    coerce_fid,
    decode_profiles,
    decode_single_user,
    decode_user_page,
)


def test_coerce_fid_accepts_only_numbers():
    assert coerce_fid(42) == 42
    assert coerce_fid(42.0) == 42
    assert coerce_fid("42") is None
    assert coerce_fid(True) is None
    assert coerce_fid(None) is None
    assert coerce_fid(4.5) is None


def test_user_page_top_level_shape():
    page = decode_user_page({"users": [{"fid": 1}, {"fid": 2}], "next": {"cursor": "abc"}})
    assert page.fids == [1, 2]
    assert page.next_cursor == "abc"


def test_user_page_nested_result_shape_with_bare_cursor():
    page = decode_user_page({"result": {"users": [{"fid": 7}], "next": "xyz"}})
    assert page.fids == [7]
    assert page.next_cursor == "xyz"


def test_user_page_unwraps_follow_entries_and_skips_malformed():
    payload = {
        "users": [
            {"object": "follow", "user": {"fid": 10}},
            {"object": "follow", "user": {"username": "nofid"}},
            {"fid": "11"},
            None,
            {"fid": 12},
        ],
        "next": {"cursor": ""},
    }
    page = decode_user_page(payload)
    assert page.fids == [10, 12]
    assert page.next_cursor is None


def test_user_page_without_users_or_next():
    page = decode_user_page({})
    assert page.fids == []
    assert page.next_cursor is None


def test_profiles_accept_snake_and_camel_case():
    profiles = decode_profiles(
        {
            "users": [
                {"fid": 1, "username": "a", "display_name": "A", "pfp_url": "https://x/1"},
                {"fid": 2, "username": "b", "displayName": "B", "pfpUrl": "https://x/2"},
                {"username": "skipped"},
            ]
        }
    )
    assert [(p.fid, p.display_name, p.pfp_url) for p in profiles] == [
        (1, "A", "https://x/1"),
        (2, "B", "https://x/2"),
    ]


def test_profiles_from_result_shape():
    profiles = decode_profiles({"result": {"users": [{"fid": 3, "username": "c"}]}})
    assert profiles[0].fid == 3
    assert profiles[0].display_name is None


def test_single_user_lookup_shapes():
    assert decode_single_user({"user": {"fid": 5, "username": "e"}}).fid == 5
    assert decode_single_user({"result": {"user": {"fid": 6}}}).fid == 6
    assert decode_single_user({"result": {}}) is None
