from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship

from threadly.config import DB_SCHEMA
from threadly.database import Base
from threadly.models.associations import thread_likes
from threadly.models.user_model import _utcnow


class Thread(Base):
    __tablename__ = "threads"
    __table_args__ = ({"schema": DB_SCHEMA},)

    id = Column(Integer, primary_key=True, index=True)
    text = Column(Text, nullable=False)

    author_id = Column(
        Integer,
        ForeignKey(f"{DB_SCHEMA}.users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    community_id = Column(
        Integer,
        ForeignKey(f"{DB_SCHEMA}.communities.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    # set on replies
    parent_id = Column(
        Integer,
        ForeignKey(f"{DB_SCHEMA}.threads.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False)

    # relationships
    author = relationship("User")
    community = relationship("Community")
    parent = relationship("Thread", remote_side=[id], back_populates="children")
    children = relationship(
        "Thread",
        back_populates="parent",
        order_by="Thread.created_at.asc()",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    likes = relationship("User", secondary=thread_likes)
