"""Post Routes — post creation, lookup and the caller's timeline."""

from fastapi import APIRouter, Depends, Response, status

from microblog.api.dependencies import get_current_user_id, get_profile_service
from microblog.core.domain_types import PostId, UserId
from microblog.schemas.posts import (
    CreatePostRequest,
    CreatePostResponse,
    PostResponse,
    RawPostResponse,
)
from microblog.services.profile_service import ProfileService

router = APIRouter(prefix="/api/v1", tags=["posts"])


@router.post(
    "/posts", response_model=CreatePostResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_post(
    body: CreatePostRequest,
    response: Response,
    user_id: UserId = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    post_id = await service.create_post(user_id, body.body)
    response.headers["Location"] = f"{router.prefix}/posts/{post_id}"
    return CreatePostResponse(id=post_id)


@router.get("/posts/{post_id}", response_model=RawPostResponse)
async def get_post(
    post_id: str, service: ProfileService = Depends(get_profile_service),
):
    return RawPostResponse.model_validate(await service.get_post(PostId(post_id)))


@router.get("/timeline", response_model=list[PostResponse])
async def get_timeline(
    user_id: UserId = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    """Own posts plus followees' posts, newest first."""
    posts = await service.get_timeline(user_id)
    return [PostResponse.model_validate(p) for p in posts]
