import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict, List, Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection

from userdesk.data.adapter import SQLAlchemyAdapter
from userdesk.exceptions import ConstraintViolationException, DataAccessException
from userdesk.users.models import User, users_table

UPDATABLE_FIELDS = ("name", "email", "password")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class UserRepository:
    """
    Store operations for users.

    Every method runs as a single statement in its own transaction.
    SQLAlchemy errors surface as DataAccessException.
    """

    def __init__(self, adapter: SQLAlchemyAdapter):
        self.adapter = adapter

    @asynccontextmanager
    async def _connection(self, operation: str) -> AsyncIterator[AsyncConnection]:
        try:
            async with self.adapter.get_connection() as conn:
                yield conn
        except IntegrityError as e:
            raise ConstraintViolationException(
                f"Failed to {operation}: {e.orig}"
            ) from e
        except SQLAlchemyError as e:
            raise DataAccessException(f"Failed to {operation}: {e}") from e

    async def create(self, data: Dict[str, Any]) -> User:
        """Insert a new user with a generated id and timestamps."""
        now = _utcnow()
        values = {
            "id": str(uuid.uuid4()),
            "name": data["name"],
            "email": data["email"],
            "password": data["password"],
            "created_at": now,
            "updated_at": now,
        }
        async with self._connection("create user") as conn:
            await conn.execute(insert(users_table).values(**values))
        return User(**values)

    async def find_all(self) -> List[User]:
        query = select(users_table).order_by(users_table.c.created_at)
        async with self._connection("fetch users") as conn:
            result = await conn.execute(query)
            return [User.from_row(row) for row in result.fetchall()]

    async def find_by_id(self, user_id: str) -> Optional[User]:
        query = select(users_table).where(users_table.c.id == user_id)
        async with self._connection("fetch user") as conn:
            row = (await conn.execute(query)).first()
        return User.from_row(row) if row is not None else None

    async def find_by_email(self, email: str) -> Optional[User]:
        query = select(users_table).where(users_table.c.email == email)
        async with self._connection("fetch user by email") as conn:
            row = (await conn.execute(query)).first()
        return User.from_row(row) if row is not None else None

    async def update(self, user_id: str, changes: Dict[str, Any]) -> int:
        """
        Apply the given field changes to one user.

        Returns:
            Number of rows updated
        """
        values = {key: value for key, value in changes.items() if key in UPDATABLE_FIELDS}
        values["updated_at"] = _utcnow()

        statement = (
            update(users_table).where(users_table.c.id == user_id).values(**values)
        )
        async with self._connection("update user") as conn:
            result = await conn.execute(statement)
            return result.rowcount

    async def delete_by_id(self, user_id: str) -> bool:
        statement = delete(users_table).where(users_table.c.id == user_id)
        async with self._connection("delete user") as conn:
            result = await conn.execute(statement)
            return result.rowcount > 0

    async def count(self) -> int:
        query = select(func.count()).select_from(users_table)
        async with self._connection("count users") as conn:
            return (await conn.execute(query)).scalar_one()
