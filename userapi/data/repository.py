from abc import ABC, abstractmethod
from typing import List, Optional

from sqlalchemy import delete, func, insert, select, update

from userapi.data.adapter import SQLAlchemyAdapter
from userapi.data.entity import User

_database_adapter: Optional[SQLAlchemyAdapter] = None


def set_database_adapter(adapter: Optional[SQLAlchemyAdapter]):
    global _database_adapter
    _database_adapter = adapter


def get_database_adapter() -> SQLAlchemyAdapter:
    if _database_adapter is None:
        raise RuntimeError("Database not initialized")
    return _database_adapter


class UserRepository(ABC):
    """Persistence contract for User records."""

    @abstractmethod
    async def save(self, user: User) -> User:
        """Insert when ``user.id`` is None, otherwise overwrite that row."""

    @abstractmethod
    async def find_all(self) -> List[User]: ...

    @abstractmethod
    async def find_by_id(self, id: int) -> Optional[User]: ...

    @abstractmethod
    async def delete_by_id(self, id: int) -> None: ...

    @abstractmethod
    async def exists_by_id(self, id: int) -> bool: ...

    @abstractmethod
    async def count(self) -> int: ...


class SQLAlchemyUserRepository(UserRepository):
    """
    UserRepository backed by SQLAlchemy Core.

    Each call runs in its own transaction. Database errors are not caught
    here and reach the caller unchanged.
    """

    def __init__(self, adapter: Optional[SQLAlchemyAdapter] = None):
        self._adapter = adapter

    @property
    def adapter(self) -> SQLAlchemyAdapter:
        return self._adapter or get_database_adapter()

    @staticmethod
    def _to_user(row) -> User:
        return User(id=row.id, name=row.name, email=row.email)

    async def save(self, user: User) -> User:
        table = self.adapter.get_table()
        values = {"name": user.name, "email": user.email}

        async with self.adapter.connection() as conn:
            if user.id is None:
                result = await conn.execute(insert(table).values(**values))
                new_id = result.inserted_primary_key[0]
                return User(id=new_id, **values)

            result = await conn.execute(
                update(table).where(table.c.id == user.id).values(**values)
            )
            if result.rowcount == 0:
                await conn.execute(insert(table).values(id=user.id, **values))
            return User(id=user.id, **values)

    async def find_all(self) -> List[User]:
        table = self.adapter.get_table()
        async with self.adapter.connection() as conn:
            result = await conn.execute(select(table).order_by(table.c.id))
            return [self._to_user(row) for row in result.fetchall()]

    async def find_by_id(self, id: int) -> Optional[User]:
        table = self.adapter.get_table()
        async with self.adapter.connection() as conn:
            result = await conn.execute(select(table).where(table.c.id == id))
            row = result.first()
            return self._to_user(row) if row is not None else None

    async def delete_by_id(self, id: int) -> None:
        table = self.adapter.get_table()
        async with self.adapter.connection() as conn:
            await conn.execute(delete(table).where(table.c.id == id))

    async def exists_by_id(self, id: int) -> bool:
        table = self.adapter.get_table()
        async with self.adapter.connection() as conn:
            result = await conn.execute(
                select(func.count()).select_from(table).where(table.c.id == id)
            )
            return result.scalar_one() > 0

    async def count(self) -> int:
        table = self.adapter.get_table()
        async with self.adapter.connection() as conn:
            result = await conn.execute(select(func.count()).select_from(table))
            return result.scalar_one()
