"""
Tests for contact GraphQL resolvers
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
import strawberry

from contacts.graphql.resolvers.contact import (
    create_contact,
    delete_contact,
    get_repository_from_info,
    parse_contact_id,
    resolve_contact_by_id,
    resolve_contacts,
    update_contact,
)
from contacts.repository import ContactRecord, ContactRepository, StorageError


@pytest.fixture
def mock_repository():
    return AsyncMock(spec=ContactRepository)


@pytest.fixture
def mock_info(mock_repository):
    """Create a mock GraphQL info object whose context carries a repository."""
    info = MagicMock(spec=strawberry.Info)
    info.context = {"request": MagicMock(), "repository": mock_repository}
    return info


@pytest.fixture
def sample_record():
    return ContactRecord(id=7, first_name="Ada", last_name="Lovelace", email="ada@x.com")


class TestParseContactId:
    def test_integer_string(self):
        assert parse_contact_id(strawberry.ID("12")) == 12

    def test_surrounding_whitespace(self):
        assert parse_contact_id(" 3 ") == 3

    def test_non_integer(self):
        assert parse_contact_id("abc") is None

    def test_signed_64_bit_bounds(self):
        assert parse_contact_id(str(2**63 - 1)) == 2**63 - 1
        assert parse_contact_id(str(-(2**63))) == -(2**63)

    def test_beyond_64_bit_range(self):
        assert parse_contact_id("99999999999999999999") is None
        assert parse_contact_id(str(2**63)) is None
        assert parse_contact_id(str(-(2**63) - 1)) is None


class TestGetRepositoryFromInfo:
    def test_missing_repository_raises(self):
        info = MagicMock(spec=strawberry.Info)
        info.context = {"request": MagicMock()}

        with pytest.raises(RuntimeError):
            get_repository_from_info(info)


class TestQueryResolvers:
    @pytest.mark.asyncio
    async def test_contacts_maps_every_record(self, mock_info, mock_repository, sample_record):
        mock_repository.list_all.return_value = [
            sample_record,
            ContactRecord(id=8, first_name="Alan", last_name="Turing", email="alan@x.com"),
        ]

        result = await resolve_contacts(mock_info)

        assert [c.id for c in result] == ["7", "8"]
        assert result[0].first_name == "Ada"
        assert result[1].email == "alan@x.com"

    @pytest.mark.asyncio
    async def test_contact_found(self, mock_info, mock_repository, sample_record):
        mock_repository.get_by_id.return_value = sample_record

        result = await resolve_contact_by_id(mock_info, strawberry.ID("7"))

        mock_repository.get_by_id.assert_awaited_once_with(7)
        assert result is not None
        assert result.id == "7"
        assert result.last_name == "Lovelace"

    @pytest.mark.asyncio
    async def test_contact_not_found_is_none(self, mock_info, mock_repository):
        mock_repository.get_by_id.return_value = None

        assert await resolve_contact_by_id(mock_info, strawberry.ID("99")) is None

    @pytest.mark.asyncio
    async def test_non_integer_id_skips_storage(self, mock_info, mock_repository):
        assert await resolve_contact_by_id(mock_info, strawberry.ID("abc")) is None
        mock_repository.get_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_storage_error_propagates(self, mock_info, mock_repository):
        mock_repository.get_by_id.side_effect = StorageError("disk I/O error")

        with pytest.raises(StorageError, match="disk I/O error"):
            await resolve_contact_by_id(mock_info, strawberry.ID("1"))


class TestMutationResolvers:
    @pytest.mark.asyncio
    async def test_create_returns_assigned_id(self, mock_info, mock_repository, sample_record):
        mock_repository.insert.return_value = sample_record

        result = await create_contact(mock_info, "Ada", "Lovelace", "ada@x.com")

        mock_repository.insert.assert_awaited_once_with("Ada", "Lovelace", "ada@x.com")
        assert result.id == "7"
        assert result.email == "ada@x.com"

    @pytest.mark.asyncio
    async def test_update_confirms(self, mock_info, mock_repository):
        mock_repository.update.return_value = True

        result = await update_contact(mock_info, strawberry.ID("7"), "A", "B", "c@x.com")

        mock_repository.update.assert_awaited_once_with(7, "A", "B", "c@x.com")
        assert result == "Contact #7 updated"

    @pytest.mark.asyncio
    async def test_update_missing_id_still_confirms(self, mock_info, mock_repository):
        mock_repository.update.return_value = False

        result = await update_contact(mock_info, strawberry.ID("404"), "A", "B", "c@x.com")

        assert result == "Contact #404 updated"

    @pytest.mark.asyncio
    async def test_delete_confirms(self, mock_info, mock_repository):
        mock_repository.delete.return_value = True

        assert await delete_contact(mock_info, strawberry.ID("7")) == "Contact #7 deleted"
        mock_repository.delete.assert_awaited_once_with(7)

    @pytest.mark.asyncio
    async def test_delete_non_integer_id_is_noop(self, mock_info, mock_repository):
        assert await delete_contact(mock_info, strawberry.ID("x")) == "Contact #x deleted"
        mock_repository.delete.assert_not_awaited()
