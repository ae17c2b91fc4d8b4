"""Profile Schemas — profile, relationship listing and partial edit payloads.

Invariants:
    - EditProfileBody keeps "absent" and "empty" apart: only keys present in
      the JSON body reach the core; an explicit null counts as absent

Design Decisions:
    - model_fields_set over Optional defaults: pydantic already records which
      keys the client sent, no sentinel needed at the HTTP layer
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from microblog.core.domain_types import UNSET
from microblog.core.users import EditProfileRequest
from microblog.schemas.posts import PostResponse


class EditProfileBody(BaseModel):
    username: str | None = None
    bio: str | None = None

    def to_request(self) -> EditProfileRequest:
        sent = self.model_fields_set
        return EditProfileRequest(
            username=self.username if "username" in sent and self.username is not None else UNSET,
            bio=self.bio if "bio" in sent and self.bio is not None else UNSET,
        )


class RelationshipsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    followers: int
    following: int


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    username: str
    avatar_url: str = Field(validation_alias="avatar")
    bio: str
    joined: datetime
    last_seen: datetime
    relationships: RelationshipsResponse
    posts: list[PostResponse]


class UserInfoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    username: str
    avatar_url: str = Field(validation_alias="avatar")
    bio: str
    joined: datetime
