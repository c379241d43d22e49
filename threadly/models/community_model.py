from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship

from threadly.config import DB_SCHEMA
from threadly.database import Base
from threadly.models.associations import community_members
from threadly.models.user_model import _utcnow


class Community(Base):
    __tablename__ = "communities"
    __table_args__ = {"schema": DB_SCHEMA}

    id = Column(Integer, primary_key=True, index=True)
    # organization id assigned by the identity provider
    external_id = Column(String, unique=True, index=True, nullable=False)
    username = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    image = Column(String, nullable=True)
    bio = Column(Text, nullable=True)

    created_by_id = Column(
        Integer,
        ForeignKey(f"{DB_SCHEMA}.users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False)

    created_by = relationship("User")
    members = relationship("User", secondary=community_members, back_populates="communities")
    # top-level threads posted in the community
    threads = relationship(
        "Thread",
        primaryjoin="and_(Community.id == Thread.community_id, Thread.parent_id == None)",
        order_by="Thread.created_at.desc()",
        viewonly=True,
    )
