"""
Unit tests for UserRepository and the SQLAlchemy adapter.
"""

import uuid

import pytest

from userdesk.data import SQLAlchemyAdapter, metadata
from userdesk.exceptions import ConstraintViolationException, DataAccessException
from userdesk.users import UserRepository


def user_data(name="Alice", email="alice@example.com", password="s3cretpass"):
    return {"name": name, "email": email, "password": password}


class TestCrudOperations:
    """Tests for basic CRUD operations."""

    @pytest.mark.asyncio
    async def test_create_generates_id_and_timestamps(self, user_repo):
        """Should save a new user and generate an id."""
        user = await user_repo.create(user_data())

        assert uuid.UUID(user.id)
        assert user.name == "Alice"
        assert user.email == "alice@example.com"
        assert user.password == "s3cretpass"
        assert user.created_at is not None
        assert user.updated_at == user.created_at

    @pytest.mark.asyncio
    async def test_find_by_id(self, user_repo):
        saved = await user_repo.create(user_data())

        found = await user_repo.find_by_id(saved.id)
        assert found is not None
        assert found.id == saved.id
        assert found.email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_find_by_id_not_found(self, user_repo):
        """Should return None when no user has the id."""
        assert await user_repo.find_by_id(str(uuid.uuid4())) is None

    @pytest.mark.asyncio
    async def test_find_by_email(self, user_repo):
        saved = await user_repo.create(user_data())

        found = await user_repo.find_by_email("alice@example.com")
        assert found.id == saved.id
        assert await user_repo.find_by_email("nobody@example.com") is None

    @pytest.mark.asyncio
    async def test_find_all(self, user_repo):
        await user_repo.create(user_data("User1", "user1@example.com"))
        await user_repo.create(user_data("User2", "user2@example.com"))
        await user_repo.create(user_data("User3", "user3@example.com"))

        users = await user_repo.find_all()
        assert len(users) == 3
        assert await user_repo.count() == 3

    @pytest.mark.asyncio
    async def test_find_all_empty(self, user_repo):
        assert await user_repo.find_all() == []

    @pytest.mark.asyncio
    async def test_update_changes_only_given_fields(self, user_repo):
        saved = await user_repo.create(user_data())

        updated_rows = await user_repo.update(saved.id, {"name": "Alicia"})
        assert updated_rows == 1

        found = await user_repo.find_by_id(saved.id)
        assert found.name == "Alicia"
        assert found.email == saved.email
        assert found.password == saved.password
        assert found.updated_at >= saved.updated_at

    @pytest.mark.asyncio
    async def test_update_ignores_unknown_fields(self, user_repo):
        saved = await user_repo.create(user_data())

        await user_repo.update(saved.id, {"id": "other", "name": "Alicia"})

        assert await user_repo.find_by_id(saved.id) is not None
        assert await user_repo.find_by_id("other") is None

    @pytest.mark.asyncio
    async def test_update_missing_user(self, user_repo):
        assert await user_repo.update(str(uuid.uuid4()), {"name": "Ghost"}) == 0

    @pytest.mark.asyncio
    async def test_delete_by_id(self, user_repo):
        saved = await user_repo.create(user_data())

        assert await user_repo.delete_by_id(saved.id) is True
        assert await user_repo.find_by_id(saved.id) is None
        assert await user_repo.delete_by_id(saved.id) is False


class TestStoreErrors:
    """Tests for store failures surfacing as DataAccessException."""

    @pytest.mark.asyncio
    async def test_duplicate_email_violates_constraint(self, user_repo):
        await user_repo.create(user_data())

        with pytest.raises(ConstraintViolationException) as exc_info:
            await user_repo.create(user_data(name="Other"))

        assert "create user" in str(exc_info.value)
        assert exc_info.value.__cause__ is not None
        assert await user_repo.count() == 1

    @pytest.mark.asyncio
    async def test_disconnected_adapter(self):
        repo = UserRepository(SQLAlchemyAdapter(metadata))

        with pytest.raises(DataAccessException):
            await repo.find_all()

    @pytest.mark.asyncio
    async def test_missing_table_wrapped(self):
        adapter = SQLAlchemyAdapter(metadata)
        await adapter.connect("sqlite+aiosqlite:///:memory:")
        try:
            repo = UserRepository(adapter)
            with pytest.raises(DataAccessException) as exc_info:
                await repo.find_all()
            assert "fetch users" in str(exc_info.value)
        finally:
            await adapter.disconnect()
