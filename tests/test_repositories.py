"""
Tests for the entity repositories (markets, managers, stores, assignments).
"""
import pytest

from braketime.core.auth.service import pwd_context
from braketime.modules.assignments.repository import AssignmentsRepository
from braketime.modules.managers.repository import ManagersRepository
from braketime.modules.markets.repository import MarketsRepository
from braketime.modules.stores.repository import StoresRepository
from braketime.shared.services.backend_client import BackendError


class TestMarketsRepository:
    @pytest.mark.asyncio
    async def test_create_update_delete(self, fake_backend, backend):
        repo = MarketsRepository(backend)

        market = await repo.create("North")
        assert market.name == "North"

        renamed = await repo.update(market.id, "North Zone")
        assert renamed.name == "North Zone"

        assert await repo.delete(market.id) is True
        assert fake_backend.tables["markets"] == []

    @pytest.mark.asyncio
    async def test_create_failure_returns_none(self, fake_backend, backend):
        fake_backend.fail("POST", "markets")
        assert await MarketsRepository(backend).create("North") is None

    @pytest.mark.asyncio
    async def test_update_missing_market_returns_none(self, backend):
        assert await MarketsRepository(backend).update(123, "Nowhere") is None

    @pytest.mark.asyncio
    async def test_get_all_propagates_errors(self, fake_backend, backend):
        fake_backend.fail("GET", "markets")
        with pytest.raises(BackendError):
            await MarketsRepository(backend).get_all()


class TestManagersRepository:
    @pytest.mark.asyncio
    async def test_create_hashes_password(self, fake_backend, backend):
        manager = await ManagersRepository(backend).create("Bob", "bob@x.com", "secret", 1)

        assert manager.name == "Bob"
        assert manager.market_id == 1
        stored = fake_backend.tables["market_managers"][0]["password"]
        assert stored != "secret"
        assert pwd_context.verify("secret", stored)

    @pytest.mark.asyncio
    async def test_update_without_password_omits_field(self, fake_backend, backend):
        fake_backend.seed("market_managers", id=3, name="Bob", email="bob@x.com", password="old", market_id=None)

        manager = await ManagersRepository(backend).update(3, "Bob", "bob@x.com", None, 2)

        assert manager.market_id == 2
        _, _, _, body = fake_backend.calls("PATCH", "market_managers")[-1]
        assert "password" not in body
        assert fake_backend.tables["market_managers"][0]["password"] == "old"

    @pytest.mark.asyncio
    async def test_get_all_does_not_read_passwords(self, fake_backend, backend):
        fake_backend.seed("market_managers", name="Bob", email="bob@x.com", password="old")

        await ManagersRepository(backend).get_all()

        _, _, params, _ = fake_backend.calls("GET", "market_managers")[-1]
        assert "password" not in params["select"]


class TestStoresRepository:
    @pytest.mark.asyncio
    async def test_create_with_manual_id(self, fake_backend, backend):
        store = await StoresRepository(backend).create("Main St", None, store_id=42)

        assert store.id == 42
        _, _, _, body = fake_backend.calls("POST", "stores")[-1]
        assert body == [{"store_name": "Main St", "market_id": None, "id": 42}]

    @pytest.mark.asyncio
    async def test_create_without_id_lets_backend_assign(self, fake_backend, backend):
        await StoresRepository(backend).create("Main St", 1)

        _, _, _, body = fake_backend.calls("POST", "stores")[-1]
        assert "id" not in body[0]

    @pytest.mark.asyncio
    async def test_update_can_leave_manager_column_alone(self, fake_backend, backend):
        fake_backend.seed("stores", id=5, store_name="Old", market_id=None, manager_id=7)
        repo = StoresRepository(backend)

        await repo.update(5, "New", 1, assign_manager=False)
        assert fake_backend.tables["stores"][0]["manager_id"] == 7

        await repo.update(5, "New", 1, manager_id=None)
        assert fake_backend.tables["stores"][0]["manager_id"] is None


class TestAssignmentsRepository:
    @pytest.mark.asyncio
    async def test_assign_and_lookups(self, backend):
        repo = AssignmentsRepository(backend)

        assignment = await repo.assign(7, 42)
        await repo.assign(7, 43)

        assert assignment.manager_id == 7
        assert await repo.get_assignments_for_store(42) == [7]
        assert sorted(await repo.get_stores_for_manager(7)) == [42, 43]

    @pytest.mark.asyncio
    async def test_unassign_removes_only_that_pair(self, fake_backend, backend):
        fake_backend.seed("market_manager_stores", manager_id=7, store_id=42)
        fake_backend.seed("market_manager_stores", manager_id=8, store_id=42)

        assert await AssignmentsRepository(backend).unassign(7, 42) is True
        remaining = fake_backend.tables["market_manager_stores"]
        assert [(a["manager_id"], a["store_id"]) for a in remaining] == [(8, 42)]

    @pytest.mark.asyncio
    async def test_unassign_failure_returns_false(self, fake_backend, backend):
        fake_backend.fail("DELETE", "market_manager_stores")
        assert await AssignmentsRepository(backend).unassign(7, 42) is False
