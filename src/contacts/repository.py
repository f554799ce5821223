"""Storage accessor for the contacts table.

Every method runs exactly one statement in its own unit of work and raises
:class:`StorageError` (or a subclass) when the database reports a failure.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from sqlalchemy import delete, select, update
from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .database import Database
from .dbmodels import Base, Contacts
from .logging import get_logger

logger = get_logger(__name__)

# SQLite names the violated column as "<table>.<column>" in UNIQUE failures
EMAIL_CONSTRAINT_COLUMN = f"{Contacts.__tablename__}.email"


class StorageError(Exception):
    """Raised when the database fails to execute a contacts statement."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DuplicateEmailError(StorageError):
    """Raised when an insert or update would repeat an existing email."""

    pass


@dataclass(frozen=True)
class ContactRecord:
    id: int
    first_name: str | None
    last_name: str | None
    email: str | None

    @classmethod
    def from_row(cls, row: Contacts) -> ContactRecord:
        return cls(id=row.id, first_name=row.first_name, last_name=row.last_name, email=row.email)


def _engine_message(error: SQLAlchemyError) -> str:
    """Return the driver's own error text rather than SQLAlchemy's wrapper."""
    if isinstance(error, DBAPIError) and error.orig is not None:
        return str(error.orig)
    return str(error)


class ContactRepository:
    """CRUD over the ``contacts`` table through an injected :class:`Database`."""

    def __init__(self, database: Database) -> None:
        self.database = database

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncGenerator[AsyncSession, None]:
        try:
            async with self.database.session() as session:
                yield session
        except IntegrityError as e:
            message = _engine_message(e)
            logger.warning("Contact constraint violated", operation=operation, error=message)
            if message.endswith(EMAIL_CONSTRAINT_COLUMN):
                raise DuplicateEmailError(message) from e
            raise StorageError(message) from e
        except SQLAlchemyError as e:
            message = _engine_message(e)
            logger.error("Contact storage operation failed", operation=operation, error=message)
            raise StorageError(message) from e

    async def ensure_schema(self) -> None:
        """Create the contacts table if it does not exist yet."""
        try:
            async with self.database.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all, tables=[Contacts.__table__])
        except SQLAlchemyError as e:
            raise StorageError(_engine_message(e)) from e
        logger.info("Contacts table ready", table=Contacts.__tablename__)

    async def list_all(self) -> list[ContactRecord]:
        async with self._session("list_all") as session:
            result = await session.execute(select(Contacts))
            return [ContactRecord.from_row(row) for row in result.scalars().all()]

    async def get_by_id(self, contact_id: int) -> ContactRecord | None:
        async with self._session("get_by_id") as session:
            result = await session.execute(select(Contacts).where(Contacts.id == contact_id))
            row = result.scalar_one_or_none()
            return ContactRecord.from_row(row) if row is not None else None

    async def insert(self, first_name: str, last_name: str, email: str) -> ContactRecord:
        async with self._session("insert") as session:
            contact = Contacts(first_name=first_name, last_name=last_name, email=email)
            session.add(contact)
            await session.flush()
            record = ContactRecord.from_row(contact)

        logger.info("Contact created", contact_id=record.id)
        return record

    async def update(self, contact_id: int, first_name: str, last_name: str, email: str) -> bool:
        """Replace every mutable field of a contact.

        Returns:
            True if a row matched ``contact_id``, False if nothing was changed
        """
        stmt = (
            update(Contacts)
            .where(Contacts.id == contact_id)
            .values(first_name=first_name, last_name=last_name, email=email)
            .execution_options(synchronize_session=False)
        )
        async with self._session("update") as session:
            result = await session.execute(stmt)
        return result.rowcount > 0

    async def delete(self, contact_id: int) -> bool:
        """Remove a contact.

        Returns:
            True if a row matched ``contact_id``, False if nothing was removed
        """
        stmt = (
            delete(Contacts)
            .where(Contacts.id == contact_id)
            .execution_options(synchronize_session=False)
        )
        async with self._session("delete") as session:
            result = await session.execute(stmt)
        return result.rowcount > 0
