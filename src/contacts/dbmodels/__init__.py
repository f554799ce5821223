"""
Database models for the Contacts API (authoritative ORM definitions).

Column names match the camelCase layout of existing ``contacts`` tables so a
database file created by earlier deployments is read unchanged.
"""

from sqlalchemy import Integer, MetaData, PrimaryKeyConstraint, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Naming convention for deterministic constraint names
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all database models with type checking support."""

    metadata = MetaData(naming_convention=naming_convention)


class Contacts(Base):
    __tablename__ = "contacts"
    __table_args__ = (
        PrimaryKeyConstraint("id"),
        UniqueConstraint("email"),
        # AUTOINCREMENT keeps ids of deleted rows from being handed out again
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, autoincrement=True)
    first_name: Mapped[str | None] = mapped_column("firstName", Text)
    last_name: Mapped[str | None] = mapped_column("lastName", Text)
    email: Mapped[str | None] = mapped_column(Text)


target_metadata = Base.metadata

__all__ = ["Base", "Contacts", "target_metadata"]
