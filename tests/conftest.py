import os

os.environ.setdefault("AUTH_SECRET_KEY", "test-secret-key-with-at-least-32-characters")
os.environ.pop("REVALIDATE_WEBHOOK_URL", None)
# low enough that the rate-limit test can hit it
os.environ["POST_RATE"] = "2/minute"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from threadly.config import DB_SCHEMA
from threadly.database import Base, get_async_session
from threadly.limiter import limiter
from threadly.main import app
from threadly.models.community_model import Community
from threadly.models.thread_model import Thread
from threadly.models.user_model import User
from helpers import BASE_TIME


class Seeder:
    """Writes fixture rows through its own session."""

    def __init__(self, session):
        self.session = session

    async def user(self, external_id, username, name=None, onboarded=True, created_at=None, image=None):
        user = User(
            external_id=external_id,
            username=username,
            name=name or username.title(),
            image=image or f"https://img.test/{username}.png",
            bio="",
            onboarded=onboarded,
            created_at=created_at or BASE_TIME,
        )
        self.session.add(user)
        await self.session.commit()
        return user

    async def community(self, external_id, name, members=()):
        community = Community(
            external_id=external_id,
            username=name.lower().replace(" ", "-"),
            name=name,
            image=f"https://img.test/{external_id}.png",
            members=list(members),
        )
        self.session.add(community)
        await self.session.commit()
        return community

    async def thread(self, author, text, parent=None, community=None, created_at=None, likers=()):
        thread = Thread(
            text=text,
            author_id=author.id,
            parent_id=parent.id if parent is not None else None,
            community_id=community.id if community is not None else None,
            created_at=created_at or BASE_TIME,
            likes=list(likers),
        )
        self.session.add(thread)
        await self.session.commit()
        return thread


@pytest_asyncio.fixture
async def engine():
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        execution_options={"schema_translate_map": {DB_SCHEMA: None}},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s


@pytest_asyncio.fixture
async def seed(session_factory):
    async with session_factory() as s:
        yield Seeder(s)


@pytest_asyncio.fixture
async def client(session_factory):
    async def _override_session():
        async with session_factory() as s:
            yield s

    app.dependency_overrides[get_async_session] = _override_session
    limiter.enabled = False
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    limiter.enabled = True
    app.dependency_overrides.clear()
