# threadly/actions/community_actions.py
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from threadly.errors import ActionError
from threadly.models.community_model import Community
from threadly.models.thread_model import Thread

logger = logging.getLogger(__name__)


async def fetch_community_posts(session: AsyncSession, community_id: str) -> Optional[Community]:
    """Community with its top-level threads, their authors, likes and replies."""
    try:
        stmt = (
            select(Community)
            .where(Community.external_id == community_id)
            .options(
                selectinload(Community.threads).options(
                    selectinload(Thread.author),
                    selectinload(Thread.community),
                    selectinload(Thread.likes),
                    selectinload(Thread.children).selectinload(Thread.author),
                )
            )
        )
        return (await session.execute(stmt)).scalars().first()
    except SQLAlchemyError as e:
        logger.exception("Error fetching community posts for %s", community_id)
        raise ActionError(f"Failed to fetch community posts: {e}") from e
