"""
Shared test fixtures and configuration for the Rolegate test suite.
"""

# noqa: E402 (Standard for test configuration)
import os
import shutil
from typing import AsyncGenerator, Dict

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

import tests.test_env_setup as env_setup  # noqa: F401
import rolegate.models  # noqa: F401  Registers tables on SQLModel.metadata
from rolegate.core.specials import Special
from rolegate.core.store import SQLAuthorizationStore
from tests.test_env_setup import TEST_DB_DIR, TEST_DB_PATH

# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture(scope="function")
async def test_db() -> AsyncGenerator[sessionmaker, None]:
    """Provide a session factory bound to a fresh file-based SQLite database."""
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)

    engine = create_async_engine(f"sqlite+aiosqlite:///{TEST_DB_PATH}", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    session_factory = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    yield session_factory

    await engine.dispose()


@pytest.fixture
def store(test_db: sessionmaker) -> SQLAuthorizationStore:
    return SQLAuthorizationStore(session_factory=test_db)


@pytest.fixture
async def catalog(store: SQLAuthorizationStore) -> Dict[str, int]:
    """Seed a small role/permission catalog and return ids by slug."""
    editor = await store.create_role("Editor")
    owner = await store.create_role("Owner", special=Special.ALL_ACCESS)
    banned = await store.create_role("Banned", special=Special.NO_ACCESS)
    moderator = await store.create_role("Moderator", special=Special.LEVEL_ACCESS)
    chief = await store.create_role("Editor in Chief", slug="editor.in.chief")

    edit_article = await store.create_permission("Edit Article", slug="edit.article")
    edit_post = await store.create_permission("Edit Post", slug="edit.post")
    publish = await store.create_permission("Publish", slug="publish.article")

    await store.grant_permission_to_role(editor.id, edit_article.id)
    await store.grant_permission_to_role(chief.id, edit_article.id)
    await store.grant_permission_to_role(chief.id, publish.id)

    return {
        "editor": editor.id,
        "owner": owner.id,
        "banned": banned.id,
        "moderator": moderator.id,
        "editor.in.chief": chief.id,
        "edit.article": edit_article.id,
        "edit.post": edit_post.id,
        "publish.article": publish.id,
    }


@pytest.fixture
async def test_user(store: SQLAuthorizationStore):
    """Create a test user."""
    return await store.create_user("testuser", email="test@example.com")


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(scope="session", autouse=True)
def test_env():
    """Cleanup test directories after session."""
    yield
    if os.path.exists(TEST_DB_DIR):
        shutil.rmtree(TEST_DB_DIR, ignore_errors=True)
