# threadly/views/thread_card.py
"""
ThreadCard: the props a thread card is rendered from, plus the display state
derived from them (like count, "liked by me", reply label, avatar stack).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from threadly.schemas.thread_schemas import LikeResult, ThreadCardOut

AVATAR_PREVIEW_COUNT = 2


@dataclass
class LikeState:
    """
    Like button state for one viewer. The next click asks for `intent()`;
    whatever the server answers replaces the local state in `reconcile()`.
    """

    count: int
    liked: bool

    @classmethod
    def from_initial(cls, initial_likes: Iterable[str], current_user_id: str) -> "LikeState":
        likes = list(initial_likes or [])
        return cls(count=len(likes), liked=current_user_id in likes)

    def intent(self) -> bool:
        return not self.liked

    def reconcile(self, result: LikeResult) -> "LikeState":
        self.count = result.count
        self.liked = result.liked
        return self


def reply_label(count: int) -> Optional[str]:
    if count <= 0:
        return None
    return f"{count} repl{'ies' if count > 1 else 'y'}"


def build_thread_card(
    *,
    id: str,
    current_user_id: str,
    parent_id: Optional[str],
    content: str,
    author: dict,
    community: Optional[dict],
    created_at: str,
    comments: Optional[List[dict]] = None,
    initial_likes: Optional[List[str]] = None,
    is_comment: bool = False,
) -> ThreadCardOut:
    comments = comments or []
    initial_likes = initial_likes or []
    state = LikeState.from_initial(initial_likes, current_user_id)

    avatars: List[Optional[str]] = []
    if not is_comment:
        avatars = [
            (c.get("author") or {}).get("image")
            for c in comments[:AVATAR_PREVIEW_COUNT]
        ]

    return ThreadCardOut(
        id=id,
        current_user_id=current_user_id,
        parent_id=parent_id,
        content=content,
        author=author,
        community=community,
        created_at=created_at,
        comments=[{"author": {"image": (c.get("author") or {}).get("image")}} for c in comments],
        initial_likes=initial_likes,
        is_comment=is_comment,
        likes=state.count,
        liked_by_user=state.liked,
        reply_label=reply_label(len(comments)),
        comment_avatars=avatars,
    )


def card_from_thread_record(record: dict, current_user_id: str, is_comment: bool = False) -> ThreadCardOut:
    """Card for a record made by `sanitize_post_data` or `sanitize_thread_data`."""
    return build_thread_card(
        id=record["_id"],
        current_user_id=current_user_id,
        parent_id=record["parent_id"],
        content=record["text"],
        author=record["author"],
        community=record["community"],
        created_at=record["created_at"],
        comments=record.get("children"),
        initial_likes=record["likes"],
        is_comment=is_comment,
    )
