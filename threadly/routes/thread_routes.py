# threadly/routes/thread_routes.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from threadly.actions.thread_actions import add_comment_to_thread, create_thread, like_post
from threadly.config import LIKE_RATE, POST_RATE
from threadly.database import get_async_session
from threadly.deps.identity import get_current_identity
from threadly.limiter import limiter
from threadly.moderation.profanity import ensure_clean_or_400
from threadly.schemas.thread_schemas import (
    CreateCommentIn, CreateThreadIn, LikeIn, LikeResult, ThreadCardOut
)
from threadly.utils.sanitize import sanitize_post_data
from threadly.views.thread_card import card_from_thread_record

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/threads", tags=["threads"])


@router.post("", response_model=ThreadCardOut, status_code=status.HTTP_201_CREATED)
@limiter.limit(POST_RATE)
async def post_thread(
    request: Request,
    payload: CreateThreadIn,
    identity: str = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
):
    ensure_clean_or_400(payload.text, "Thread")

    thread = await create_thread(db, payload.text, identity, payload.community_id, payload.path)
    if thread is None:
        raise HTTPException(status_code=404, detail="User not found")

    return card_from_thread_record(sanitize_post_data(thread), identity)


@router.post("/{thread_id}/comments", response_model=ThreadCardOut, status_code=status.HTTP_201_CREATED)
@limiter.limit(POST_RATE)
async def post_comment(
    request: Request,
    thread_id: int,
    payload: CreateCommentIn,
    identity: str = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
):
    ensure_clean_or_400(payload.text, "Reply")

    path = payload.path or f"/thread/{thread_id}"
    comment = await add_comment_to_thread(db, thread_id, payload.text, identity, path)
    if comment is None:
        raise HTTPException(status_code=404, detail="Thread not found")

    return card_from_thread_record(sanitize_post_data(comment), identity, is_comment=True)


@router.post("/{thread_id}/like", response_model=LikeResult)
@limiter.limit(LIKE_RATE)
async def toggle_like(
    request: Request,
    thread_id: int,
    payload: Optional[LikeIn] = None,
    identity: str = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
):
    liked = payload.liked if payload is not None else None
    result = await like_post(db, thread_id, identity, liked=liked)
    if result is None:
        raise HTTPException(status_code=404, detail="Thread not found")

    logger.debug("Like on thread %s by %s -> %s", thread_id, identity, result)
    return result
