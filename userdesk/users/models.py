from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from sqlalchemy import Column, DateTime, String, Table

from userdesk.data import metadata

users_table = Table(
    "users",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("password", String(255), nullable=False),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
)


@dataclass
class User:
    """A persisted user account."""

    id: str
    name: str
    email: str
    # Stored exactly as submitted, no hashing.
    password: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row) -> "User":
        return cls(**dict(row._mapping))

    def to_dict(self, exclude: Iterable[str] = ()) -> Dict[str, Any]:
        excluded = set(exclude)
        return {key: value for key, value in asdict(self).items() if key not in excluded}
