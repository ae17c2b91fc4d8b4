"""Post Schemas — post creation payload and enriched post views."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CreatePostRequest(BaseModel):
    body: str


class CreatePostResponse(BaseModel):
    id: str


class AuthorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    username: str
    avatar: str


class PostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    body: str
    timestamp: datetime
    author: AuthorResponse


class RawPostResponse(BaseModel):
    """A stored post without author enrichment."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    author_id: str
    body: str
    timestamp: datetime
