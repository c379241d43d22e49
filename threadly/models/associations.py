from sqlalchemy import Column, Integer, ForeignKey, Table

from threadly.config import DB_SCHEMA
from threadly.database import Base

# composite keys: a user likes a thread, or joins a community, at most once
thread_likes = Table(
    "thread_likes",
    Base.metadata,
    Column("thread_id", Integer, ForeignKey(f"{DB_SCHEMA}.threads.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey(f"{DB_SCHEMA}.users.id", ondelete="CASCADE"), primary_key=True),
    schema=DB_SCHEMA,
)

community_members = Table(
    "community_members",
    Base.metadata,
    Column("community_id", Integer, ForeignKey(f"{DB_SCHEMA}.communities.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey(f"{DB_SCHEMA}.users.id", ondelete="CASCADE"), primary_key=True),
    schema=DB_SCHEMA,
)
