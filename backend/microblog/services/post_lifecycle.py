"""Post Lifecycle — creates and retrieves posts authored by a user.

Invariants:
    - A post is only stored for an author that exists at creation time
    - Returned post lists are newest first
"""

import logging

from microblog.core.domain_types import PostId, UserId
from microblog.core.errors import InvalidIDError, InvalidUsernameError, NotFoundError
from microblog.core.posts import Post, new_post, newest_first
from microblog.core.repository_protocols import PostRepository, UserRepository
from microblog.core.validation import is_well_formed_id

logger = logging.getLogger(__name__)


class PostLifecycle:

    def __init__(self, users: UserRepository, posts: PostRepository):
        self.users = users
        self.posts = posts

    async def create_post(self, author_id: UserId, body: str) -> PostId:
        if not is_well_formed_id(author_id):
            raise InvalidIDError()
        author = await self.users.find_by_id(author_id)
        if author is None:
            raise NotFoundError()

        post = new_post(author.id, body)
        await self.posts.store(post)
        logger.info(
            f"Post created by {author.username}",
            extra={"user_id": author.id, "post_id": post.id},
        )
        return post.id

    async def get_post(self, post_id: PostId) -> Post:
        if not is_well_formed_id(post_id):
            raise InvalidIDError()
        post = await self.posts.find_by_id(post_id)
        if post is None:
            raise NotFoundError("post")
        return post

    async def get_user_posts(self, username: str) -> list[Post]:
        if not username:
            raise InvalidUsernameError()
        user = await self.users.find_by_name(username)
        if user is None:
            raise NotFoundError()
        return newest_first(await self.posts.find_latest_posts_for_user(user.id))
