"""Profile Service — profile creation, views, partial edits and last-seen tracking.

Tests cover:
    - create_profile is idempotent on username and on email
    - get_profile assembles identity, avatar, counts and own posts
    - edit_profile partial-update semantics (absent / empty / taken / invalid)
    - update_last_seen refreshes the timestamp, NotFound for bad ids
"""

import pytest

from microblog.core.domain_types import UNSET, new_id
from microblog.core.errors import (
    BioTooLongError,
    ExistingUsernameError,
    InvalidIDError,
    InvalidUsernameError,
    NotFoundError,
)
from microblog.core.users import EditProfileRequest
from microblog.core.views import avatar_url


# ─── create_profile ──────────────────────────────────────────────

async def test_create_profile_stores_user_with_matching_timestamps(service, users):
    uid = new_id()
    await service.create_profile(uid, "U", "user@app.com")
    user = await users.find_by_id(uid)
    assert user.username == "U"
    assert user.email == "user@app.com"
    assert user.created_at == user.last_seen
    assert user.bio == ""
    assert user.friends == [] and user.followers == []


async def test_create_profile_ignores_existing_username(service, users, register):
    first = await register("U", "user@app.com")
    await service.create_profile(new_id(), "U", "other@app.com")
    assert await users.find_by_email("other@app.com") is None
    assert (await users.find_by_name("U")).id == first.id


async def test_create_profile_ignores_existing_email(service, users, register):
    await register("U", "user@app.com")
    await service.create_profile(new_id(), "U2", "user@app.com")
    assert await users.find_by_name("U2") is None


# ─── get_profile ─────────────────────────────────────────────────

async def test_get_profile_assembles_view(service, register):
    u = await register("U", "user@app.com")
    other = await register("O")
    await service.create_relationship(other.id, "U")
    await service.create_post(u.id, "hello")

    profile = await service.get_profile("U")

    assert profile.id == u.id
    assert profile.username == "U"
    assert profile.avatar == avatar_url("user@app.com")
    assert profile.relationships.followers == 1
    assert profile.relationships.following == 0
    assert [p.body for p in profile.posts] == ["hello"]
    assert profile.posts[0].author.username == "U"


async def test_get_profile_empty_username(service):
    with pytest.raises(InvalidUsernameError):
        await service.get_profile("")


async def test_get_profile_unknown_user(service):
    with pytest.raises(NotFoundError):
        await service.get_profile("ghost")


# ─── edit_profile ────────────────────────────────────────────────

async def test_edit_profile_with_no_fields_is_noop(service, users, register):
    u = await register("U")
    await service.edit_profile(u.id, EditProfileRequest())
    assert await users.find_by_id(u.id) == u


async def test_edit_profile_with_no_fields_still_checks_id_shape(service):
    with pytest.raises(InvalidIDError):
        await service.edit_profile("bad", EditProfileRequest())


async def test_edit_profile_empty_bio_clears_it(service, users, register):
    u = await register("U")
    await service.edit_profile(u.id, EditProfileRequest(bio="something"))
    await service.edit_profile(u.id, EditProfileRequest(bio=""))
    stored = await users.find_by_id(u.id)
    assert stored.bio == ""
    assert stored.username == "U"


async def test_edit_profile_sets_trimmed_bio(service, users, register):
    u = await register("U")
    await service.edit_profile(u.id, EditProfileRequest(bio="  about me  "))
    assert (await users.find_by_id(u.id)).bio == "about me"


async def test_edit_profile_bio_boundary(service, users, register):
    u = await register("U")
    await service.edit_profile(u.id, EditProfileRequest(bio="x" * 140))
    with pytest.raises(BioTooLongError):
        await service.edit_profile(u.id, EditProfileRequest(bio="x" * 141))
    assert (await users.find_by_id(u.id)).bio == "x" * 140


async def test_edit_profile_changes_username(service, users, register):
    u = await register("U")
    await service.edit_profile(u.id, EditProfileRequest(username="  renamed "))
    assert (await users.find_by_id(u.id)).username == "renamed"
    assert await users.find_by_name("U") is None


async def test_edit_profile_same_username_is_accepted(service, users, register):
    u = await register("U")
    await service.edit_profile(u.id, EditProfileRequest(username="U", bio="b"))
    stored = await users.find_by_id(u.id)
    assert stored.username == "U"
    assert stored.bio == "b"


async def test_edit_profile_rejects_taken_username(service, users, register):
    u = await register("U")
    await register("taken")
    with pytest.raises(ExistingUsernameError):
        await service.edit_profile(u.id, EditProfileRequest(username="taken"))
    assert (await users.find_by_id(u.id)).username == "U"


@pytest.mark.parametrize("username", ["", "   ", "has space"])
async def test_edit_profile_rejects_invalid_username(service, register, username):
    u = await register("U")
    with pytest.raises(InvalidUsernameError):
        await service.edit_profile(u.id, EditProfileRequest(username=username))


async def test_edit_profile_failed_username_leaves_bio_untouched(service, users, register):
    u = await register("U")
    await register("taken")
    with pytest.raises(ExistingUsernameError):
        await service.edit_profile(u.id, EditProfileRequest(username="taken", bio="new"))
    assert (await users.find_by_id(u.id)).bio == ""


async def test_edit_profile_unknown_user(service):
    with pytest.raises(NotFoundError):
        await service.edit_profile(new_id(), EditProfileRequest(bio="x"))


async def test_edit_profile_absent_username_untouched(service, users, register):
    u = await register("U")
    await service.edit_profile(u.id, EditProfileRequest(username=UNSET, bio="b"))
    assert (await users.find_by_id(u.id)).username == "U"


# ─── update_last_seen ────────────────────────────────────────────

async def test_update_last_seen_moves_forward(service, users, register):
    u = await register("U")
    await service.update_last_seen(u.id)
    stored = await users.find_by_id(u.id)
    assert stored.last_seen >= u.last_seen
    assert stored.created_at == u.created_at


@pytest.mark.parametrize("user_id", ["", "malformed", new_id()])
async def test_update_last_seen_not_found(service, user_id):
    with pytest.raises(NotFoundError):
        await service.update_last_seen(user_id)
