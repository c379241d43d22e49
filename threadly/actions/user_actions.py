# threadly/actions/user_actions.py
import logging
from typing import List, Optional, Tuple

from sqlalchemy import select, func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from threadly.config import PROFILE_EDIT_PATH, USERS_PAGE_SIZE
from threadly.errors import ActionError, UsernameTaken
from threadly.models.community_model import Community  # noqa: F401  (mapper registration)
from threadly.models.thread_model import Thread
from threadly.models.user_model import User
from threadly.utils.revalidate import revalidate_path

logger = logging.getLogger(__name__)

SORT_ORDERS = ("asc", "desc")


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


async def fetch_user(session: AsyncSession, user_id: str) -> Optional[User]:
    """Look a user up by identity-provider id, with their communities loaded."""
    try:
        return (
            await session.execute(
                select(User)
                .where(User.external_id == user_id)
                .options(selectinload(User.communities))
            )
        ).scalars().first()
    except SQLAlchemyError as e:
        logger.exception("Error fetching user %s", user_id)
        raise ActionError(f"Failed to fetch user: {e}") from e


async def update_user(
    session: AsyncSession,
    user_id: str,
    username: str,
    name: str,
    bio: str,
    image: Optional[str],
    path: str,
) -> User:
    """Create or update the profile behind `user_id` and mark it onboarded."""
    try:
        user = (
            await session.execute(select(User).where(User.external_id == user_id))
        ).scalars().first()
        if user is None:
            user = User(external_id=user_id)
            session.add(user)

        user.username = username.strip().lower()
        user.name = name
        user.bio = bio
        user.image = image
        user.onboarded = True

        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise UsernameTaken(f"Username already exists: {username.strip().lower()}") from e
    except SQLAlchemyError as e:
        await session.rollback()
        logger.exception("Error saving user %s", user_id)
        raise ActionError(f"Failed to create/update user: {e}") from e

    if path == PROFILE_EDIT_PATH:
        await revalidate_path(path)
    return user


async def fetch_user_posts(session: AsyncSession, user_id: str) -> Optional[User]:
    """
    User with their top-level threads, each carrying its author, community,
    likes and replies (with the reply authors).
    """
    try:
        stmt = (
            select(User)
            .where(User.external_id == user_id)
            .options(
                selectinload(User.threads).options(
                    selectinload(Thread.author),
                    selectinload(Thread.community),
                    selectinload(Thread.likes),
                    selectinload(Thread.children).selectinload(Thread.author),
                )
            )
        )
        return (await session.execute(stmt)).scalars().first()
    except SQLAlchemyError as e:
        logger.exception("Error fetching user threads for %s", user_id)
        raise ActionError(f"Failed to fetch user posts: {e}") from e


async def fetch_users(
    session: AsyncSession,
    user_id: str,
    search_string: str = "",
    page_number: int = 1,
    page_size: int = USERS_PAGE_SIZE,
    sort_by: str = "desc",
) -> Tuple[List[User], bool]:
    """
    Page through other users, optionally filtered by a case-insensitive match
    on username or name. Returns `(users, is_next)`.
    """
    if sort_by not in SORT_ORDERS:
        raise ValueError(f"sort_by must be one of {SORT_ORDERS}, got {sort_by!r}")

    skip_amount = (page_number - 1) * page_size

    filters = [User.external_id != user_id]
    if search_string.strip():
        pattern = _like_pattern(search_string)
        filters.append(
            or_(
                User.username.ilike(pattern, escape="\\"),
                User.name.ilike(pattern, escape="\\"),
            )
        )

    if sort_by == "desc":
        order = (User.created_at.desc(), User.id.desc())
    else:
        order = (User.created_at.asc(), User.id.asc())

    try:
        total = int(
            (await session.execute(select(func.count(User.id)).where(*filters))).scalar_one() or 0
        )
        users = list(
            (
                await session.execute(
                    select(User)
                    .where(*filters)
                    .order_by(*order)
                    .offset(skip_amount)
                    .limit(page_size)
                )
            ).scalars().all()
        )
    except SQLAlchemyError as e:
        logger.exception("Error fetching users")
        raise ActionError(f"Failed to fetch users: {e}") from e

    is_next = total > skip_amount + len(users)
    return users, is_next


async def get_activity(session: AsyncSession, user_id: int) -> List[Thread]:
    """Replies written by other people to threads authored by `user_id` (internal id)."""
    try:
        user_threads = (
            await session.execute(
                select(Thread)
                .where(Thread.author_id == user_id)
                .options(selectinload(Thread.children))
            )
        ).scalars().all()

        child_thread_ids = [child.id for t in user_threads for child in t.children]
        if not child_thread_ids:
            return []

        replies = (
            await session.execute(
                select(Thread)
                .where(Thread.id.in_(child_thread_ids), Thread.author_id != user_id)
                .options(selectinload(Thread.author))
                .order_by(Thread.created_at.desc(), Thread.id.desc())
            )
        ).scalars().all()
        return list(replies)
    except SQLAlchemyError as e:
        logger.exception("Error fetching replies for user %s", user_id)
        raise ActionError(f"Failed to fetch activity: {e}") from e
