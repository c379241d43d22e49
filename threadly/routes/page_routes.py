# threadly/routes/page_routes.py
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from threadly.actions.community_actions import fetch_community_posts
from threadly.actions.thread_actions import fetch_posts, fetch_thread_by_id
from threadly.actions.user_actions import fetch_user, fetch_user_posts, fetch_users, get_activity
from threadly.config import HOME_PAGE_SIZE, USERS_PAGE_SIZE
from threadly.database import get_async_session
from threadly.deps.identity import require_onboarded_user
from threadly.errors import RedirectRequired
from threadly.models.user_model import User
from threadly.schemas.page_schemas import (
    AccountType, ActivityPageOut, CommentFormOut, HomePageOut, ThreadPageOut, ThreadsTabOut
)
from threadly.schemas.user_schemas import ProfileOut, UserOut, UsersPageOut
from threadly.utils.sanitize import (
    sanitize_activity_data, sanitize_community_data, sanitize_post_data, sanitize_thread_data
)
from threadly.views.thread_card import card_from_thread_record
from threadly.views.threads_tab import build_threads_tab

router = APIRouter(tags=["pages"])


@router.get("/", response_model=HomePageOut)
async def home(
    page: int = Query(1, ge=1),
    user: User = Depends(require_onboarded_user),
    db: AsyncSession = Depends(get_async_session),
):
    posts, is_next = await fetch_posts(db, page, HOME_PAGE_SIZE)
    sanitized_posts = [sanitize_post_data(p) for p in posts]

    return HomePageOut(
        threads=[card_from_thread_record(p, user.external_id) for p in sanitized_posts],
        page=page,
        is_next=is_next,
    )


@router.get("/thread/{thread_id}", response_model=ThreadPageOut)
async def thread_detail(
    thread_id: int,
    user: User = Depends(require_onboarded_user),
    db: AsyncSession = Depends(get_async_session),
):
    thread = await fetch_thread_by_id(db, thread_id)
    if not thread:
        raise HTTPException(status_code=404, detail="Thread not found")

    sanitized_thread = sanitize_thread_data(thread)

    return ThreadPageOut(
        thread=card_from_thread_record(sanitized_thread, user.external_id),
        comment_form=CommentFormOut(
            thread_id=str(thread_id),
            current_user_img=user.image,
            current_user_id=user.external_id,
        ),
        replies=[
            card_from_thread_record(child, user.external_id, is_comment=True)
            for child in sanitized_thread["children"]
        ],
    )


async def _threads_tab(
    db: AsyncSession, viewer: User, account_id: str, account_type: AccountType
) -> ThreadsTabOut:
    if account_type == "Community":
        result = await fetch_community_posts(db, account_id)
    else:
        result = await fetch_user_posts(db, account_id)

    if result is None:
        raise RedirectRequired("/")

    return ThreadsTabOut(
        account_id=account_id,
        account_type=account_type,
        threads=build_threads_tab(result, account_type, viewer.external_id),
    )


@router.get("/profile/{account_id}/threads", response_model=ThreadsTabOut)
async def profile_threads(
    account_id: str,
    user: User = Depends(require_onboarded_user),
    db: AsyncSession = Depends(get_async_session),
):
    return await _threads_tab(db, user, account_id, "User")


@router.get("/communities/{account_id}/threads", response_model=ThreadsTabOut)
async def community_threads(
    account_id: str,
    user: User = Depends(require_onboarded_user),
    db: AsyncSession = Depends(get_async_session),
):
    return await _threads_tab(db, user, account_id, "Community")


@router.get("/profile/{account_id}", response_model=ProfileOut)
async def profile(
    account_id: str,
    _viewer: User = Depends(require_onboarded_user),
    db: AsyncSession = Depends(get_async_session),
):
    account = await fetch_user(db, account_id)
    if not account:
        raise HTTPException(status_code=404, detail="User not found")

    return ProfileOut(
        **UserOut.from_user(account).model_dump(),
        onboarded=account.onboarded,
        communities=[sanitize_community_data(c) for c in account.communities],
    )


@router.get("/activity", response_model=ActivityPageOut)
async def activity(
    user: User = Depends(require_onboarded_user),
    db: AsyncSession = Depends(get_async_session),
):
    replies = await get_activity(db, user.id)
    return ActivityPageOut(items=[sanitize_activity_data(r) for r in replies])


@router.get("/search", response_model=UsersPageOut)
async def search_users(
    q: str = "",
    page: int = Query(1, ge=1),
    page_size: int = Query(USERS_PAGE_SIZE, ge=1, le=100),
    sort_by: Literal["asc", "desc"] = "desc",
    user: User = Depends(require_onboarded_user),
    db: AsyncSession = Depends(get_async_session),
):
    users, is_next = await fetch_users(
        db,
        user.external_id,
        search_string=q,
        page_number=page,
        page_size=page_size,
        sort_by=sort_by,
    )
    return UsersPageOut(
        users=[UserOut.from_user(u) for u in users],
        page=page,
        is_next=is_next,
    )
