from __future__ import annotations

from pydantic import BaseModel
from typing import List, Literal, Optional

from threadly.schemas.thread_schemas import AuthorOut, ThreadCardOut

AccountType = Literal["User", "Community"]


class HomePageOut(BaseModel):
    threads: List[ThreadCardOut] = []
    page: int
    is_next: bool


class CommentFormOut(BaseModel):
    thread_id: str
    current_user_img: Optional[str] = None
    current_user_id: str


class ThreadPageOut(BaseModel):
    thread: ThreadCardOut
    comment_form: CommentFormOut
    replies: List[ThreadCardOut] = []


class ThreadsTabOut(BaseModel):
    account_id: str
    account_type: AccountType
    threads: List[ThreadCardOut] = []


class ActivityItemOut(BaseModel):
    id: str
    parent_id: Optional[str] = None
    text: str
    author: AuthorOut
    created_at: str


class ActivityPageOut(BaseModel):
    items: List[ActivityItemOut] = []
