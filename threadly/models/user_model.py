from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, func
from sqlalchemy.orm import relationship

from threadly.config import DB_SCHEMA
from threadly.database import Base
from threadly.models.associations import community_members


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"
    __table_args__ = {"schema": DB_SCHEMA}

    id = Column(Integer, primary_key=True, index=True)
    # subject id assigned by the identity provider
    external_id = Column(String, unique=True, index=True, nullable=False)
    username = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    bio = Column(Text, nullable=True)
    image = Column(String, nullable=True)
    onboarded = Column(Boolean, default=False, nullable=False, server_default="false")

    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False)

    # top-level threads only; replies hang off their parent
    threads = relationship(
        "Thread",
        primaryjoin="and_(User.id == Thread.author_id, Thread.parent_id == None)",
        order_by="Thread.created_at.desc()",
        viewonly=True,
    )
    communities = relationship(
        "Community",
        secondary=community_members,
        back_populates="members",
    )
