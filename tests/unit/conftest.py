"""Shared fixtures: file-backed SQLite per test, seed helpers, actors."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.domain.models.actor import Actor, UserRole
from app.infrastructure.database.models import ComplaintRecord, ProfileRecord
from app.infrastructure.database.session import create_tables

BASE_TIME = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
async def engine(tmp_path):
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    await create_tables(eng)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        bind=engine,
        expire_on_commit=False,
        autoflush=False,
        class_=AsyncSession,
    )


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def add_profile(session_factory):
    """Insert a profiles row. Returns the user_id."""

    async def _add(user_id, name, role="student", email=None, department=None, student_id=None):
        async with session_factory() as session:
            session.add(
                ProfileRecord(
                    user_id=user_id,
                    name=name,
                    email=email or f"{user_id}@campus.edu",
                    role=role,
                    department=department,
                    student_id=student_id,
                )
            )
            await session.commit()
        return user_id

    return _add


@pytest.fixture
def add_complaint(session_factory):
    """Insert a complaints row created `minutes` after BASE_TIME. Returns the id."""

    async def _add(user_id, title="Broken projector", minutes=0, **fields):
        created_at = BASE_TIME + timedelta(minutes=minutes)
        record = ComplaintRecord(
            title=title,
            description=fields.pop("description", "The projector in room 101 does not turn on."),
            user_id=user_id,
            created_at=created_at,
            updated_at=created_at,
            **fields,
        )
        async with session_factory() as session:
            session.add(record)
            await session.commit()
        return record.id

    return _add


def _make_actor(identifier="u1", role=UserRole.STUDENT, name="Asha", department="CS"):
    return Actor(
        identifier=identifier,
        email=f"{identifier}@campus.edu",
        display_name=name,
        role=role,
        department=department,
        student_id="S-100" if role == UserRole.STUDENT else None,
    )


@pytest.fixture
def actor_factory():
    return _make_actor


@pytest.fixture
def student():
    return _make_actor()


@pytest.fixture
def admin():
    return _make_actor(identifier="a1", role=UserRole.ADMIN, name="Admin", department=None)
