from __future__ import annotations

from pydantic import BaseModel, Field
from typing import List, Optional


class AuthorOut(BaseModel):
    id: str
    name: str
    image: Optional[str] = None


class CommunityOut(BaseModel):
    id: str
    name: str
    image: Optional[str] = None


class CommentAuthorOut(BaseModel):
    image: Optional[str] = None


class CommentPreviewOut(BaseModel):
    author: CommentAuthorOut


class ThreadCardOut(BaseModel):
    # props
    id: str
    current_user_id: str
    parent_id: Optional[str] = None
    content: str
    author: AuthorOut
    community: Optional[CommunityOut] = None
    created_at: str
    comments: List[CommentPreviewOut] = []
    initial_likes: List[str] = []
    is_comment: bool = False

    # display state derived from the props
    likes: int = 0
    liked_by_user: bool = False
    reply_label: Optional[str] = None
    comment_avatars: List[Optional[str]] = []


class CreateThreadIn(BaseModel):
    text: str = Field(min_length=3)
    community_id: Optional[str] = None
    path: str = "/"


class CreateCommentIn(BaseModel):
    text: str = Field(min_length=1)
    path: Optional[str] = None


class LikeIn(BaseModel):
    # None toggles; a value sets the state, so resubmitting is harmless
    liked: Optional[bool] = None


class LikeResult(BaseModel):
    liked: bool
    count: int
