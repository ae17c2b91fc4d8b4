"""Timeline Aggregator — a user's own posts merged with every followee's posts.

Invariants:
    - Output is non-increasing by timestamp; ties ordered by post id descending
    - No pagination or limit is applied
    - Each entry carries its own author's display fields
"""

from microblog.core.domain_types import UserId
from microblog.core.errors import InvalidIDError, NotFoundError
from microblog.core.posts import newest_first
from microblog.core.repository_protocols import PostRepository, UserRepository
from microblog.core.validation import is_well_formed_id
from microblog.core.views import PostView, build_post_views


class TimelineAggregator:

    def __init__(self, users: UserRepository, posts: PostRepository):
        self.users = users
        self.posts = posts

    async def get_timeline(self, user_id: UserId) -> list[PostView]:
        if not is_well_formed_id(user_id):
            raise InvalidIDError()
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError()

        posts = newest_first(
            await self.posts.find_latest_posts_for_user_and_friends(user),
        )
        authors = {user.id: user}
        if user.friends:
            authors.update({u.id: u for u in await self.users.find_by_ids(user.friends)})
        return build_post_views(posts, authors)
