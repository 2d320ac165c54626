from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional

from sqlalchemy import Column, Integer, MetaData, String, Table

USERS_TABLE = "users"


@dataclass
class User:
    """A stored user. ``id`` is assigned by the database on first save."""

    id: Optional[int] = None
    name: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        """Build a User from a JSON object, ignoring unknown keys."""
        if not isinstance(data, dict):
            raise ValueError("Request body must be a JSON object")
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        for name in ("name", "email"):
            if values.get(name) is not None and not isinstance(values[name], str):
                raise ValueError(f"Field '{name}' must be a string")
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def create_user_table(metadata: MetaData) -> Table:
    """Table layout derived from the User shape."""
    return Table(
        USERS_TABLE,
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("name", String(255), nullable=True),
        Column("email", String(255), nullable=True),
        sqlite_autoincrement=True,
    )
