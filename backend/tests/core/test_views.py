"""Read Projections — avatar derivation and view builders.

Tests cover:
    - avatar_url is deterministic and email-derived
    - build_profile counts relationships and attributes posts to the owner
    - build_post_views uses each post's own author
"""

from datetime import datetime, timedelta, timezone

from microblog.core.domain_types import new_id
from microblog.core.posts import Post, newest_first
from microblog.core.users import User
from microblog.core.views import (
    avatar_url,
    build_post_views,
    build_profile,
    build_user_infos,
)


def _user(name: str) -> User:
    return User(id=new_id(), username=name, email=f"{name}@app.com", bio=f"{name} bio")


def test_avatar_url_is_gravatar_identicon():
    url = avatar_url("user@app.com")
    assert url.startswith("https://www.gravatar.com/avatar/")
    assert url.endswith("?d=identicon")
    assert url == avatar_url("user@app.com")
    assert url != avatar_url("other@app.com")


def test_avatar_url_normalizes_case_and_whitespace():
    assert avatar_url(" User@App.com ") == avatar_url("user@app.com")


def test_build_profile_counts_relationships():
    u, f1, f2 = _user("u"), _user("f1"), _user("f2")
    u.follow(f1)
    f1.follow(u)
    f2.follow(u)
    profile = build_profile(u, [])
    assert profile.relationships.following == 1
    assert profile.relationships.followers == 2
    assert profile.avatar == avatar_url(u.email)
    assert profile.posts == []


def test_build_post_views_uses_each_post_author():
    a, b = _user("a"), _user("b")
    posts = [
        Post(id=new_id(), author_id=a.id, body="from a"),
        Post(id=new_id(), author_id=b.id, body="from b"),
    ]
    views = build_post_views(posts, {a.id: a, b.id: b})
    assert [v.author.username for v in views] == ["a", "b"]


def test_build_post_views_skips_unknown_authors():
    a = _user("a")
    posts = [Post(id=new_id(), author_id=new_id(), body="orphan")]
    assert build_post_views(posts, {a.id: a}) == []


def test_build_user_infos_maps_fields():
    a = _user("a")
    [info] = build_user_infos([a])
    assert info.id == a.id
    assert info.bio == "a bio"
    assert info.joined == a.created_at


def test_newest_first_breaks_ties_by_id():
    now = datetime.now(timezone.utc)
    author = new_id()
    older = Post(id=new_id(), author_id=author, body="1", timestamp=now - timedelta(seconds=1))
    tie_a = Post(id=new_id(), author_id=author, body="2", timestamp=now)
    tie_b = Post(id=new_id(), author_id=author, body="3", timestamp=now)
    assert [p.body for p in newest_first([older, tie_a, tie_b])] == ["3", "2", "1"]
