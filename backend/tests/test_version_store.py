"""
Tests for the VersionStore: gap-free version allocation and history reads.
"""

import asyncio
import gc

import pytest
import pytest_asyncio
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from content_engine.core.database import create_tables
from content_engine.core.exceptions import ConcurrencyError, ValidationError
from content_engine.models.user_context import ContextCategory, UserContext
from content_engine.services.version_store import VersionStore


@pytest.mark.asyncio
async def test_sequential_writes_are_numbered_from_one(version_store):
    versions = []
    for i in range(3):
        row = await version_store.update_or_create("owner-1", ContextCategory.CONTEXT, {"n": i}, 0.5)
        versions.append(row.version)

    assert versions == [1, 2, 3]

    latest = await version_store.find_latest_by_type("owner-1", ContextCategory.CONTEXT)
    assert latest.version == 3
    assert latest.data == {"n": 2}


@pytest.mark.asyncio
async def test_concurrent_writes_have_no_gaps_or_repeats(version_store):
    rows = await asyncio.gather(*[
        version_store.update_or_create("owner-1", "context", {"n": i}, 0.5)
        for i in range(10)
    ])

    assert sorted(row.version for row in rows) == list(range(1, 11))
    history = await version_store.find_by_type("owner-1", "context")
    assert [row.version for row in history] == list(range(10, 0, -1))


@pytest_asyncio.fixture
async def file_session_factory(tmp_path):
    """File-backed database where every session opens its own connection."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'versions.db'}", poolclass=NullPool)
    await create_tables(engine)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.mark.asyncio
async def test_independent_stores_racing_on_separate_connections(file_session_factory):
    stores = [VersionStore(session_factory=file_session_factory, max_retries=10) for _ in range(10)]

    rows = await asyncio.gather(*[
        store.update_or_create("owner-1", "context", {"writer": i}, 0.5)
        for i, store in enumerate(stores)
    ])

    assert sorted(row.version for row in rows) == list(range(1, 11))
    history = await stores[0].find_by_type("owner-1", "context")
    assert [row.version for row in history] == list(range(10, 0, -1))
    assert {row.data["writer"] for row in history} == set(range(10))


@pytest.mark.asyncio
async def test_returned_row_is_the_inserted_row(version_store):
    row = await version_store.update_or_create("owner-1", "context", {"n": 1}, 0.4)

    assert row is not None
    assert row.id
    stored = await version_store.find_by_id(row.id)
    assert (stored.version, stored.data, stored.confidence) == (row.version, row.data, row.confidence)


@pytest.mark.asyncio
async def test_idle_locks_are_released(version_store):
    for owner in ("owner-1", "owner-2", "owner-3"):
        await version_store.update_or_create(owner, "context", {}, 0.5)

    gc.collect()
    assert len(version_store._locks) == 0


@pytest.mark.asyncio
async def test_categories_and_owners_are_numbered_independently(version_store):
    await version_store.update_or_create("owner-1", ContextCategory.CONTEXT, {}, 0.5)
    await version_store.update_or_create("owner-1", ContextCategory.CONTEXT, {}, 0.5)

    style = await version_store.update_or_create("owner-1", ContextCategory.WRITING_STYLE, {}, 0.5)
    other = await version_store.update_or_create("owner-2", ContextCategory.CONTEXT, {}, 0.5)

    assert style.version == 1
    assert other.version == 1


@pytest.mark.asyncio
async def test_conflict_is_retried(version_store, monkeypatch):
    original_insert = version_store._insert_next_version
    attempts = []

    async def conflicting_once(*args, **kwargs):
        attempts.append(1)
        if len(attempts) == 1:
            raise IntegrityError("INSERT INTO user_context", {}, Exception("duplicate version"))
        return await original_insert(*args, **kwargs)

    monkeypatch.setattr(version_store, "_insert_next_version", conflicting_once)

    row = await version_store.update_or_create("owner-1", "context", {"n": 1}, 0.5)

    assert row.version == 1
    assert len(attempts) == 2


@pytest.mark.asyncio
async def test_persistent_conflict_raises_concurrency_error(session_factory, monkeypatch):
    store = VersionStore(session_factory=session_factory, max_retries=3)
    attempts = []

    async def always_conflicting(*args, **kwargs):
        attempts.append(1)
        raise IntegrityError("INSERT INTO user_context", {}, Exception("duplicate version"))

    monkeypatch.setattr(store, "_insert_next_version", always_conflicting)

    with pytest.raises(ConcurrencyError) as exc_info:
        await store.update_or_create("owner-1", "context", {}, 0.5)

    assert len(attempts) == 3
    assert exc_info.value.details["attempts"] == 3
    assert await store.find_by_type("owner-1", "context") == []


@pytest.mark.asyncio
async def test_unique_constraint_rejects_duplicate_versions(session_factory):
    async with session_factory() as session:
        session.add(UserContext(owner_id="owner-1", context_type="context", data={}, confidence=0.5, version=1))
        session.add(UserContext(owner_id="owner-1", context_type="context", data={}, confidence=0.5, version=1))

        with pytest.raises(IntegrityError):
            await session.commit()


@pytest.mark.asyncio
async def test_confidence_outside_unit_interval_rejected(version_store):
    with pytest.raises(ValidationError):
        await version_store.update_or_create("owner-1", "context", {}, 1.2)


@pytest.mark.asyncio
async def test_summary_and_high_confidence(version_store):
    await version_store.update_or_create("owner-1", ContextCategory.CONTEXT, {"v": 1}, 0.9)
    await version_store.update_or_create("owner-1", ContextCategory.CONTEXT, {"v": 2}, 0.6)
    await version_store.update_or_create("owner-1", ContextCategory.WRITING_STYLE, {"v": 1}, 0.85)

    summary = await version_store.get_context_summary("owner-1")
    assert summary["context"].data == {"v": 2}
    assert summary["writing_style"].version == 1

    high = await version_store.find_high_confidence("owner-1")
    assert [row.context_type for row in high] == ["writing_style"]


@pytest.mark.asyncio
async def test_find_by_id_and_owner_removal(version_store):
    row = await version_store.update_or_create("owner-1", "context", {"v": 1}, 0.5)
    await version_store.update_or_create("owner-2", "context", {"v": 1}, 0.5)

    assert (await version_store.find_by_id(row.id)).owner_id == "owner-1"
    assert len(await version_store.find_by_owner("owner-1")) == 1

    assert await version_store.delete_by_owner("owner-1") == 1
    assert await version_store.find_by_owner("owner-1") == []
    assert await version_store.find_latest_by_type("owner-1", "context") is None
    assert len(await version_store.find_by_owner("owner-2")) == 1
