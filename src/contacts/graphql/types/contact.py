"""
Contact GraphQL type definitions
"""

from typing import TYPE_CHECKING

import strawberry

if TYPE_CHECKING:
    from ...repository import ContactRecord


@strawberry.type
class Contact:
    """Contact type for GraphQL API."""

    id: strawberry.ID | None
    first_name: str | None
    last_name: str | None
    email: str | None

    @classmethod
    def from_record(cls, record: "ContactRecord") -> "Contact":
        return cls(
            id=strawberry.ID(str(record.id)),
            first_name=record.first_name,
            last_name=record.last_name,
            email=record.email,
        )
