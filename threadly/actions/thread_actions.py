# threadly/actions/thread_actions.py
import logging
from typing import List, Optional, Tuple

from sqlalchemy import select, func, delete, insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from threadly.errors import ActionError
from threadly.models.associations import thread_likes
from threadly.models.community_model import Community
from threadly.models.thread_model import Thread
from threadly.models.user_model import User
from threadly.schemas.thread_schemas import LikeResult
from threadly.utils.revalidate import revalidate_path

logger = logging.getLogger(__name__)


def _thread_options():
    # everything the detail view reads, one level of replies deep
    return (
        selectinload(Thread.author),
        selectinload(Thread.community),
        selectinload(Thread.likes),
        selectinload(Thread.children).options(
            selectinload(Thread.author),
            selectinload(Thread.community),
            selectinload(Thread.likes),
        ),
    )


async def _user_by_external_id(session: AsyncSession, user_id: str) -> Optional[User]:
    return (
        await session.execute(select(User).where(User.external_id == user_id))
    ).scalars().first()


async def fetch_posts(
    session: AsyncSession, page_number: int = 1, page_size: int = 20
) -> Tuple[List[Thread], bool]:
    """Top-level threads, newest first. Returns `(posts, is_next)`."""
    skip_amount = (page_number - 1) * page_size
    top_level = Thread.parent_id.is_(None)

    try:
        total = int(
            (await session.execute(select(func.count(Thread.id)).where(top_level))).scalar_one() or 0
        )
        posts = (
            await session.execute(
                select(Thread)
                .where(top_level)
                .order_by(Thread.created_at.desc(), Thread.id.desc())
                .offset(skip_amount)
                .limit(page_size)
                .options(
                    selectinload(Thread.author),
                    selectinload(Thread.community),
                    selectinload(Thread.likes),
                    selectinload(Thread.children).selectinload(Thread.author),
                )
            )
        ).scalars().all()
    except SQLAlchemyError as e:
        logger.exception("Error fetching posts")
        raise ActionError(f"Failed to fetch posts: {e}") from e

    is_next = total > skip_amount + len(posts)
    return list(posts), is_next


async def fetch_thread_by_id(session: AsyncSession, thread_id: int) -> Optional[Thread]:
    try:
        return (
            await session.execute(
                select(Thread)
                .where(Thread.id == thread_id)
                .options(*_thread_options())
                .execution_options(populate_existing=True)
            )
        ).scalars().first()
    except SQLAlchemyError as e:
        logger.exception("Error fetching thread %s", thread_id)
        raise ActionError(f"Failed to fetch thread: {e}") from e


async def create_thread(
    session: AsyncSession,
    text: str,
    author_id: str,
    community_id: Optional[str],
    path: str,
) -> Optional[Thread]:
    """Post a new top-level thread. Returns None if the author is unknown."""
    try:
        author = await _user_by_external_id(session, author_id)
        if author is None:
            return None

        community = None
        if community_id:
            community = (
                await session.execute(
                    select(Community).where(Community.external_id == community_id)
                )
            ).scalars().first()

        thread = Thread(
            text=text,
            author_id=author.id,
            community_id=community.id if community else None,
        )
        session.add(thread)
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        raise ActionError(f"Failed to create thread: {e}") from e

    await revalidate_path(path)
    return await fetch_thread_by_id(session, thread.id)


async def add_comment_to_thread(
    session: AsyncSession,
    thread_id: int,
    comment_text: str,
    user_id: str,
    path: Optional[str] = None,
) -> Optional[Thread]:
    """Reply to `thread_id`. Returns None if the thread or the user is missing."""
    try:
        original = await session.get(Thread, thread_id)
        author = await _user_by_external_id(session, user_id)
        if original is None or author is None:
            return None

        comment = Thread(
            text=comment_text,
            author_id=author.id,
            parent_id=original.id,
            community_id=original.community_id,
        )
        session.add(comment)
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        raise ActionError(f"Failed to add comment to thread: {e}") from e

    if path:
        await revalidate_path(path)
    return await fetch_thread_by_id(session, comment.id)


async def _like_count(session: AsyncSession, thread_id: int) -> int:
    count_stmt = select(func.count()).select_from(thread_likes).where(
        thread_likes.c.thread_id == thread_id
    )
    return int((await session.execute(count_stmt)).scalar_one() or 0)


async def like_post(
    session: AsyncSession,
    thread_id: int,
    user_id: str,
    liked: Optional[bool] = None,
) -> Optional[LikeResult]:
    """
    Set or toggle `user_id`'s like on a thread and report the stored state.

    `liked=None` flips the current state. An explicit value is applied as-is,
    so sending the same value twice ends in the same place. The count in the
    result is read back after the write.
    """
    try:
        thread = await session.get(Thread, thread_id)
        user = await _user_by_external_id(session, user_id)
        if thread is None or user is None:
            return None

        has = (
            await session.execute(
                select(func.count()).select_from(thread_likes).where(
                    thread_likes.c.thread_id == thread_id,
                    thread_likes.c.user_id == user.id,
                )
            )
        ).scalar_one() > 0

        want = (not has) if liked is None else bool(liked)

        if want and not has:
            try:
                await session.execute(
                    insert(thread_likes).values(thread_id=thread_id, user_id=user.id)
                )
                await session.commit()
            except IntegrityError:
                # a concurrent request got there first; the like exists either way
                await session.rollback()
        elif not want and has:
            await session.execute(
                delete(thread_likes).where(
                    thread_likes.c.thread_id == thread_id,
                    thread_likes.c.user_id == user.id,
                )
            )
            await session.commit()

        count = await _like_count(session, thread_id)
    except SQLAlchemyError as e:
        await session.rollback()
        logger.exception("Error liking thread %s", thread_id)
        raise ActionError(f"Failed to like thread: {e}") from e

    return LikeResult(liked=want, count=count)
