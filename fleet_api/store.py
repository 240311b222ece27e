"""
Fleet API — Document Store (Persistence Adapter)
=================================================

What:  Id-keyed CRUD plus equality-filtered queries over one table.
Why:   Resource services stay free of SQL. They see a small document-store
       interface and get back "records affected" counts to decide on 404s.
How:   Each operation opens its own session from the injected `Database`,
       commits, and closes. Operations are wrapped in a tenacity retry loop for
       transient connectivity failures, then driver errors are translated into
       the application's exception hierarchy.

Operations:
    insert(fields)                   → stored record
    find_all()                       → all records, insertion order
    find_by_id(id)                   → record or None
    find_by_equality(attr, value)    → matching records (maybe empty)
    update_by_id(id, fields)         → number of records affected (0 or 1)
    delete_by_id(id)                 → number of records affected (0 or 1)

Error translation:
    IntegrityError / DataError / OverflowError   → ValidationError (400)
    OperationalError / lost connection / network → retried, then PersistenceError (500)
    any other SQLAlchemyError                    → PersistenceError (500)
"""

import logging
import uuid
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type, TypeVar

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import (
    DataError,
    DBAPIError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncSession
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_random_exponential,
)

from fleet_api.database import Base, Database
from fleet_api.exceptions import PersistenceError, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Failures that may resolve on their own (dropped connection, restart, timeout)
TRANSIENT_ERRORS = (OperationalError, ConnectionError, TimeoutError)


def is_transient(error: BaseException) -> bool:
    """
    True when retrying `error` could succeed.

    InterfaceError is only transient when the driver reports a lost connection;
    asyncpg also raises it client-side for values it cannot encode.
    """
    if isinstance(error, DBAPIError) and error.connection_invalidated:
        return True
    if isinstance(error, InterfaceError):
        return False
    return isinstance(error, TRANSIENT_ERRORS)


class DocumentStore:
    """
    Persistence adapter for one model.

    Args:
        database:        Engine/session owner, built by the app factory
        model:           SQLAlchemy model this store reads and writes
        retry_attempts:  Total attempts for transient failures (1 = no retry)
        retry_min_wait:  Initial backoff in seconds
        retry_max_wait:  Backoff ceiling in seconds
    """

    def __init__(
        self,
        database: Database,
        model: Type[Base],
        retry_attempts: int = 3,
        retry_min_wait: float = 0.2,
        retry_max_wait: float = 2.0,
    ):
        self.database = database
        self.model = model
        self.retry_attempts = retry_attempts
        self.retry_min_wait = retry_min_wait
        self.retry_max_wait = retry_max_wait

    @property
    def table(self) -> str:
        return self.model.__tablename__

    # ── Public operations ─────────────────────────────────────────────────

    async def insert(self, fields: Dict[str, Any]) -> Base:
        async def work(session: AsyncSession) -> Base:
            record = self.model(**fields)
            session.add(record)
            await session.flush()
            return record

        record = await self._run("insert", work)
        logger.info("Inserted %s record %s", self.table, record.id)
        return record

    async def find_all(self) -> List[Base]:
        async def work(session: AsyncSession) -> List[Base]:
            result = await session.execute(
                select(self.model).order_by(self.model.created_at, self.model.id)
            )
            return list(result.scalars().all())

        return await self._run("find_all", work)

    async def find_by_id(self, record_id: uuid.UUID) -> Optional[Base]:
        async def work(session: AsyncSession) -> Optional[Base]:
            return await session.get(self.model, record_id)

        return await self._run("find_by_id", work)

    async def find_by_equality(self, attribute: str, value: Any) -> List[Base]:
        column = getattr(self.model, attribute)

        async def work(session: AsyncSession) -> List[Base]:
            result = await session.execute(
                select(self.model)
                .where(column == value)
                .order_by(self.model.created_at, self.model.id)
            )
            return list(result.scalars().all())

        return await self._run("find_by_equality", work)

    async def update_by_id(self, record_id: uuid.UUID, fields: Dict[str, Any]) -> int:
        """
        Overwrite `fields` on the record and return how many records matched.

        An empty `fields` dict writes nothing and only reports whether the
        record exists, so callers get the same 0/1 contract.
        """
        async def work(session: AsyncSession) -> int:
            if not fields:
                result = await session.execute(
                    select(func.count()).select_from(self.model).where(self.model.id == record_id)
                )
                return int(result.scalar() or 0)
            result = await session.execute(
                update(self.model)
                .where(self.model.id == record_id)
                .values(**fields)
                .execution_options(synchronize_session=False)
            )
            return result.rowcount

        affected = await self._run("update_by_id", work)
        logger.info("Updated %s record %s (%d affected)", self.table, record_id, affected)
        return affected

    async def delete_by_id(self, record_id: uuid.UUID) -> int:
        async def work(session: AsyncSession) -> int:
            result = await session.execute(
                delete(self.model)
                .where(self.model.id == record_id)
                .execution_options(synchronize_session=False)
            )
            return result.rowcount

        affected = await self._run("delete_by_id", work)
        logger.info("Deleted %s record %s (%d affected)", self.table, record_id, affected)
        return affected

    # ── Execution ─────────────────────────────────────────────────────────

    async def _run(self, operation: str, work: Callable[[AsyncSession], Awaitable[T]]) -> T:
        """
        Run `work` in a fresh session with bounded retry and error translation.

        Only errors `is_transient` accepts are retried. Integrity and data errors mean the
        request itself is invalid, so retrying them would never succeed.
        """
        retrying = AsyncRetrying(
            retry=retry_if_exception(is_transient),
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_random_exponential(
                multiplier=self.retry_min_wait,
                max=self.retry_max_wait,
            ),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    async with self.database.session() as session:
                        return await work(session)
        except (IntegrityError, DataError, OverflowError) as e:
            logger.warning("%s.%s rejected by the store: %s", self.table, operation, getattr(e, "orig", e))
            raise ValidationError(
                message=f"The {self.model.__name__.lower()} could not be stored: "
                        "a required field is missing or has the wrong type",
                context={"operation": operation, "error_type": type(e).__name__},
            )
        except (SQLAlchemyError, ConnectionError, TimeoutError) as e:
            logger.error("%s.%s failed: %s", self.table, operation, str(e))
            raise PersistenceError(
                context={"operation": operation, "table": self.table, "error_type": type(e).__name__},
            )
