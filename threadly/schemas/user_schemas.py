from pydantic import BaseModel, Field
from typing import List, Optional

from threadly.config import PROFILE_EDIT_PATH
from threadly.schemas.thread_schemas import CommunityOut


class UpdateUserIn(BaseModel):
    username: str = Field(min_length=3, max_length=30)
    name: str = Field(min_length=1, max_length=30)
    bio: str = Field(default="", max_length=1000)
    image: Optional[str] = None
    path: str = PROFILE_EDIT_PATH


class UserOut(BaseModel):
    id: str
    username: str
    name: str
    bio: Optional[str] = None
    image: Optional[str] = None

    @classmethod
    def from_user(cls, user) -> "UserOut":
        return cls(
            id=user.external_id,
            username=user.username,
            name=user.name,
            bio=user.bio,
            image=user.image,
        )


class UsersPageOut(BaseModel):
    users: List[UserOut] = []
    page: int
    is_next: bool


class ProfileOut(UserOut):
    onboarded: bool = False
    communities: List[CommunityOut] = []
