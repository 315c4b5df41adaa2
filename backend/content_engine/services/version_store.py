"""
Version Store - append-only, gap-free version history per (owner, category).

The next version number is computed inside the INSERT itself
(``COALESCE(MAX(version), 0) + 1``) and the unique constraint on
(owner_id, context_type, version) rejects a concurrent duplicate. A rejected
write is rolled back and retried a bounded number of times.
"""

import asyncio
import uuid
import weakref
from typing import Any, Dict, List, Optional, Tuple, Union

from sqlalchemy import delete, func, insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from ..core.config import settings
from ..core.exceptions import ConcurrencyError, ValidationError
from ..core.logging_config import LoggerMixin
from ..models.document import utcnow
from ..models.user_context import ContextCategory, UserContext

Category = Union[ContextCategory, str]


def _category_value(category: Category) -> str:
    value = category.value if isinstance(category, ContextCategory) else category
    if not value:
        raise ValidationError("category is required", field="category")
    return value


class VersionStore(LoggerMixin):
    """Versioned context rows for every owner"""

    def __init__(
        self,
        session_factory: Optional[async_sessionmaker] = None,
        max_retries: Optional[int] = None,
    ):
        if session_factory is None:
            from ..core.database import AsyncSessionLocal
            session_factory = AsyncSessionLocal

        self.session_factory = session_factory
        self.max_retries = settings.VERSION_WRITE_MAX_RETRIES if max_retries is None else max_retries
        # Entries vanish once no writer holds or awaits the lock
        self._locks: "weakref.WeakValueDictionary[Tuple[str, str], asyncio.Lock]" = weakref.WeakValueDictionary()

    def _lock_for(self, owner_id: str, category: str) -> asyncio.Lock:
        key = (owner_id, category)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    async def update_or_create(
        self,
        owner_id: str,
        category: Category,
        data: Dict[str, Any],
        confidence: float,
    ) -> UserContext:
        """Append a new version; versions run 1, 2, 3... without gaps"""
        if not owner_id:
            raise ValidationError("owner_id is required", field="owner_id")
        if not 0.0 <= confidence <= 1.0:
            raise ValidationError("confidence must be within [0, 1]", field="confidence")
        category = _category_value(category)

        async with self._lock_for(owner_id, category):
            for attempt in range(1, self.max_retries + 1):
                try:
                    row = await self._insert_next_version(owner_id, category, data, confidence)
                except IntegrityError:
                    self.log_warning(
                        f"Version conflict on attempt {attempt}/{self.max_retries}",
                        owner_id=owner_id,
                        category=category,
                    )
                    continue

                self.log_info(
                    "Stored context version",
                    owner_id=owner_id,
                    category=category,
                    version=row.version,
                )
                return row

        raise ConcurrencyError(
            f"Could not allocate a version for {category} after {self.max_retries} attempts",
            owner_id=owner_id,
            category=category,
            attempts=self.max_retries,
        )

    async def _insert_next_version(
        self,
        owner_id: str,
        category: str,
        data: Dict[str, Any],
        confidence: float,
    ) -> UserContext:
        existing = UserContext.__table__.alias("existing")
        next_version = (
            select(func.coalesce(func.max(existing.c.version), 0) + 1)
            .where(existing.c.owner_id == owner_id, existing.c.context_type == category)
            .scalar_subquery()
        )
        now = utcnow()

        async with self.session_factory() as session:
            try:
                result = await session.execute(
                    insert(UserContext).values(
                        id=str(uuid.uuid4()),
                        owner_id=owner_id,
                        context_type=category,
                        data=data,
                        confidence=confidence,
                        version=next_version,
                        created_at=now,
                        last_updated=now,
                    )
                    .returning(UserContext)
                )
                row = result.scalar_one()
                await session.commit()
            except SQLAlchemyError:
                await session.rollback()
                raise

            return row

    async def find_by_type(self, owner_id: str, category: Category) -> List[UserContext]:
        """Full history for a category, newest version first"""
        stmt = (
            select(UserContext)
            .where(UserContext.owner_id == owner_id, UserContext.context_type == _category_value(category))
            .order_by(UserContext.version.desc())
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def find_latest_by_type(self, owner_id: str, category: Category) -> Optional[UserContext]:
        stmt = (
            select(UserContext)
            .where(UserContext.owner_id == owner_id, UserContext.context_type == _category_value(category))
            .order_by(UserContext.version.desc())
            .limit(1)
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return result.scalars().first()

    async def find_by_id(self, row_id: str) -> Optional[UserContext]:
        async with self.session_factory() as session:
            return await session.get(UserContext, row_id)

    async def find_by_owner(self, owner_id: str) -> List[UserContext]:
        stmt = (
            select(UserContext)
            .where(UserContext.owner_id == owner_id)
            .order_by(UserContext.context_type, UserContext.version.desc())
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def get_context_summary(self, owner_id: str) -> Dict[str, UserContext]:
        """Latest version of every category the owner has"""
        summary: Dict[str, UserContext] = {}
        for row in await self.find_by_owner(owner_id):
            summary.setdefault(row.context_type, row)
        return summary

    async def find_high_confidence(self, owner_id: str, min_confidence: float = 0.8) -> List[UserContext]:
        """Latest rows per category whose confidence reaches ``min_confidence``"""
        summary = await self.get_context_summary(owner_id)
        return [row for row in summary.values() if row.confidence >= min_confidence]

    async def delete_by_owner(self, owner_id: str) -> int:
        async with self.session_factory() as session:
            try:
                result = await session.execute(delete(UserContext).where(UserContext.owner_id == owner_id))
                await session.commit()
            except SQLAlchemyError:
                await session.rollback()
                raise

        self.log_info(f"Deleted {result.rowcount} context versions", owner_id=owner_id)
        return result.rowcount
