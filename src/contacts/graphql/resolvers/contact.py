from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...logging import get_logger
from ...repository import ContactRepository

if TYPE_CHECKING:
    from ..types.contact import Contact

logger = get_logger(__name__)

# SQLite INTEGER is a signed 64-bit value
MIN_ROW_ID = -(2**63)
MAX_ROW_ID = 2**63 - 1


def get_repository_from_info(info: strawberry.Info) -> ContactRepository:
    """Fetch the repository the router placed in the request context."""
    repository = info.context.get("repository")
    if repository is None:
        raise RuntimeError("Contact repository missing from GraphQL context")
    return repository


def parse_contact_id(id: strawberry.ID | str) -> int | None:
    """Convert a GraphQL ID into a row id.

    Returns None for values that are not integers or fall outside the signed
    64-bit range SQLite stores; such ids can never match a stored contact.
    """
    try:
        contact_id = int(str(id).strip())
    except ValueError:
        return None
    if not MIN_ROW_ID <= contact_id <= MAX_ROW_ID:
        return None
    return contact_id


# Query resolvers
async def resolve_contacts(info: strawberry.Info) -> list[Contact]:
    from ..types.contact import Contact as ContactType

    records = await get_repository_from_info(info).list_all()
    return [ContactType.from_record(record) for record in records]


async def resolve_contact_by_id(info: strawberry.Info, id: strawberry.ID) -> Contact | None:
    """
    Resolve a contact by its ID.

    A missing contact resolves to null; storage failures propagate as errors.
    """
    from ..types.contact import Contact as ContactType

    contact_id = parse_contact_id(id)
    if contact_id is None:
        logger.info("Contact not found", contact_id=str(id), reason="non-integer id")
        return None

    record = await get_repository_from_info(info).get_by_id(contact_id)
    if record is None:
        logger.info("Contact not found", contact_id=contact_id)
        return None

    return ContactType.from_record(record)


# Mutation resolvers
async def create_contact(
    info: strawberry.Info, first_name: str, last_name: str, email: str
) -> Contact:
    from ..types.contact import Contact as ContactType

    record = await get_repository_from_info(info).insert(first_name, last_name, email)
    return ContactType.from_record(record)


async def update_contact(
    info: strawberry.Info, id: strawberry.ID, first_name: str, last_name: str, email: str
) -> str:
    """
    Replace the fields of a contact.

    The confirmation is returned whether or not the id existed; a miss is
    only logged.
    """
    contact_id = parse_contact_id(id)
    updated = False
    if contact_id is not None:
        updated = await get_repository_from_info(info).update(
            contact_id, first_name, last_name, email
        )

    if not updated:
        logger.info("Update matched no contact", contact_id=str(id))

    return f"Contact #{id} updated"


async def delete_contact(info: strawberry.Info, id: strawberry.ID) -> str:
    contact_id = parse_contact_id(id)
    deleted = False
    if contact_id is not None:
        deleted = await get_repository_from_info(info).delete(contact_id)

    if not deleted:
        logger.info("Delete matched no contact", contact_id=str(id))

    return f"Contact #{id} deleted"
