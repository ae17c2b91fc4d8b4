"""User Routes — profiles, partial edits and the follow graph.

Invariants:
    - GET /users/{username} is public; everything else needs X-User-ID
    - Follow/unfollow act on behalf of the caller and return 204
    - PATCH /users only forwards the keys present in the JSON body
"""

from fastapi import APIRouter, Depends, Response, status

from microblog.api.dependencies import get_current_user_id, get_profile_service
from microblog.core.domain_types import UserId
from microblog.schemas.posts import RawPostResponse
from microblog.schemas.profile import EditProfileBody, ProfileResponse, UserInfoResponse
from microblog.services.profile_service import ProfileService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("/{username}", response_model=ProfileResponse)
async def get_profile(
    username: str, service: ProfileService = Depends(get_profile_service),
):
    return ProfileResponse.model_validate(await service.get_profile(username))


@router.patch("", status_code=status.HTTP_204_NO_CONTENT)
async def edit_profile(
    body: EditProfileBody,
    user_id: UserId = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    await service.edit_profile(user_id, body.to_request())
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{username}/posts", response_model=list[RawPostResponse])
async def get_user_posts(
    username: str, service: ProfileService = Depends(get_profile_service),
):
    posts = await service.get_user_posts(username)
    return [RawPostResponse.model_validate(p) for p in posts]


@router.get("/{username}/friends", response_model=list[UserInfoResponse])
async def get_user_friends(
    username: str,
    _: UserId = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    infos = await service.get_user_friends(username)
    return [UserInfoResponse.model_validate(i) for i in infos]


@router.get("/{username}/followers", response_model=list[UserInfoResponse])
async def get_user_followers(
    username: str,
    _: UserId = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    infos = await service.get_user_followers(username)
    return [UserInfoResponse.model_validate(i) for i in infos]


@router.post("/{username}/followers", status_code=status.HTTP_204_NO_CONTENT)
async def follow_user(
    username: str,
    user_id: UserId = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    await service.create_relationship(user_id, username)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{username}/followers", status_code=status.HTTP_204_NO_CONTENT)
async def unfollow_user(
    username: str,
    user_id: UserId = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    await service.remove_relationship(user_id, username)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
