"""
Unit tests for the SQLAlchemy-backed UserRepository.
"""

import pytest
import pytest_asyncio
from sqlalchemy.exc import OperationalError

from userapi.data import (
    SQLAlchemyAdapter,
    SQLAlchemyUserRepository,
    User,
    UserRepository,
    get_database_adapter,
    set_database_adapter,
)


@pytest_asyncio.fixture
async def setup_database():
    """Setup in-memory SQLite database for tests."""
    adapter = SQLAlchemyAdapter()
    await adapter.connect("sqlite+aiosqlite:///:memory:")
    await adapter.create_table_if_not_exists()
    set_database_adapter(adapter)

    yield adapter

    await adapter.disconnect()
    set_database_adapter(None)


@pytest.fixture
def repo(setup_database):
    return SQLAlchemyUserRepository()


class TestCrudOperations:
    """Tests for basic CRUD operations."""

    @pytest.mark.asyncio
    async def test_save_new_entity(self, repo):
        """Should save a new user and generate an id."""
        saved = await repo.save(User(name="Alice", email="alice@example.com"))

        assert saved.id is not None
        assert saved.name == "Alice"
        assert saved.email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, repo):
        first = await repo.save(User(name="A", email="a@example.com"))
        second = await repo.save(User(name="B", email="b@example.com"))

        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_save_update_entity(self, repo):
        """Should overwrite an existing row and keep its id."""
        saved = await repo.save(User(name="Bob", email="bob@example.com"))

        updated = await repo.save(
            User(id=saved.id, name="Robert", email="robert@example.com")
        )

        assert updated.id == saved.id
        assert updated.name == "Robert"
        found = await repo.find_by_id(saved.id)
        assert found == updated
        assert await repo.count() == 1

    @pytest.mark.asyncio
    async def test_save_with_unknown_id_inserts(self, repo):
        saved = await repo.save(User(id=42, name="Zed", email="zed@example.com"))

        assert saved.id == 42
        assert (await repo.find_by_id(42)).name == "Zed"

    @pytest.mark.asyncio
    async def test_find_by_id(self, repo):
        saved = await repo.save(User(name="Charlie", email="charlie@example.com"))

        found = await repo.find_by_id(saved.id)

        assert found is not None
        assert found.name == "Charlie"
        assert found.email == "charlie@example.com"

    @pytest.mark.asyncio
    async def test_find_by_id_not_found(self, repo):
        assert await repo.find_by_id(999999) is None

    @pytest.mark.asyncio
    async def test_find_all(self, repo):
        await repo.save(User(name="User1", email="user1@example.com"))
        await repo.save(User(name="User2", email="user2@example.com"))

        users = await repo.find_all()

        assert [u.name for u in users] == ["User1", "User2"]

    @pytest.mark.asyncio
    async def test_find_all_empty(self, repo):
        assert await repo.find_all() == []

    @pytest.mark.asyncio
    async def test_delete_by_id(self, repo):
        saved = await repo.save(User(name="ToDelete", email="delete@example.com"))

        await repo.delete_by_id(saved.id)

        assert await repo.find_by_id(saved.id) is None

    @pytest.mark.asyncio
    async def test_delete_missing_id_is_noop(self, repo):
        await repo.save(User(name="Keep", email="keep@example.com"))

        await repo.delete_by_id(999999)

        assert await repo.count() == 1

    @pytest.mark.asyncio
    async def test_exists_by_id(self, repo):
        saved = await repo.save(User(name="Exists", email="exists@example.com"))

        assert await repo.exists_by_id(saved.id) is True
        assert await repo.exists_by_id(999999) is False

    @pytest.mark.asyncio
    async def test_count(self, repo):
        assert await repo.count() == 0
        await repo.save(User(name="A", email="a@example.com"))
        await repo.save(User(name="B", email="b@example.com"))
        assert await repo.count() == 2

    @pytest.mark.asyncio
    async def test_null_fields_allowed(self, repo):
        saved = await repo.save(User())

        found = await repo.find_by_id(saved.id)

        assert found.name is None
        assert found.email is None


class TestStorageErrors:
    """Storage failures reach the caller unchanged."""

    @pytest_asyncio.fixture
    async def dropped_table(self, setup_database):
        table = setup_database.get_table()
        async with setup_database.connection() as conn:
            await conn.run_sync(table.drop)
        return setup_database

    @pytest.mark.asyncio
    async def test_find_all_error_propagates(self, dropped_table):
        repo = SQLAlchemyUserRepository(dropped_table)

        with pytest.raises(OperationalError, match="no such table"):
            await repo.find_all()

    @pytest.mark.asyncio
    async def test_save_error_propagates(self, dropped_table):
        repo = SQLAlchemyUserRepository(dropped_table)

        with pytest.raises(OperationalError):
            await repo.save(User(name="A", email="a@example.com"))


class TestAdapterRegistry:
    def test_get_adapter_without_initialization(self):
        set_database_adapter(None)
        with pytest.raises(RuntimeError, match="Database not initialized"):
            get_database_adapter()

    def test_repository_without_adapter(self):
        set_database_adapter(None)
        with pytest.raises(RuntimeError, match="Database not initialized"):
            SQLAlchemyUserRepository().adapter

    def test_repository_is_a_user_repository(self):
        assert isinstance(SQLAlchemyUserRepository(), UserRepository)

    def test_interface_is_abstract(self):
        with pytest.raises(TypeError):
            UserRepository()


class TestUserEntity:
    def test_from_dict_ignores_unknown_keys(self):
        user = User.from_dict({"name": "A", "email": "a@x", "role": "admin"})
        assert user == User(id=None, name="A", email="a@x")

    def test_from_dict_rejects_non_object(self):
        with pytest.raises(ValueError, match="JSON object"):
            User.from_dict(["not", "an", "object"])

    def test_to_dict(self):
        assert User(id=3, name="A", email="a@x").to_dict() == {
            "id": 3,
            "name": "A",
            "email": "a@x",
        }

    def test_from_dict_rejects_non_string_fields(self):
        with pytest.raises(ValueError, match="Field 'email' must be a string"):
            User.from_dict({"name": "A", "email": ["a@x"]})

    def test_from_dict_accepts_null_fields(self):
        assert User.from_dict({"name": None}) == User()
