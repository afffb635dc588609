# braketime/modules/admin/service.py
import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from braketime.config.settings import settings
from braketime.core.notifications import NotificationSink, ToastSeverity
from braketime.modules.assignments.repository import AssignmentsRepository
from braketime.modules.managers.repository import ManagersRepository
from braketime.modules.markets.repository import MarketsRepository
from braketime.modules.stores.repository import StoresRepository
from braketime.shared.database.models import Assignment, Market, MarketManager, Store
from braketime.shared.services.backend_client import BackendError
from .schemas import (
    AdminDashboard,
    DashboardCounts,
    ManagerView,
    MarketSummary,
    StoreView,
)

logger = logging.getLogger(__name__)

NO_MARKET = "No Market"
UNASSIGNED = "Unassigned"


class AdminDataService:
    """
    Single source of truth for the admin console: markets, managers and
    stores, plus every mutation on them.

    Every operation returns a bool. Failures surface as a toast on the
    injected sink and a False return; nothing is raised to the caller.
    After any successful mutation the whole snapshot is reloaded, so derived
    views (counts, labels) never go stale.
    """

    def __init__(
        self,
        markets_repository: MarketsRepository,
        managers_repository: ManagersRepository,
        stores_repository: StoresRepository,
        assignments_repository: AssignmentsRepository,
        notifier: NotificationSink,
        store_manager_mode: Optional[str] = None
    ):
        self.markets_repository = markets_repository
        self.managers_repository = managers_repository
        self.stores_repository = stores_repository
        self.assignments_repository = assignments_repository
        self.notifier = notifier
        self.store_manager_mode = store_manager_mode or settings.store_manager_mode

        self.markets: List[Market] = []
        self.managers: List[MarketManager] = []
        self.stores: List[Store] = []
        self.assignments: List[Assignment] = []
        self.loading = False
        self.error: Optional[str] = None

    @property
    def uses_assignment_table(self) -> bool:
        return self.store_manager_mode == "assignment"

    # ==================== LOAD ====================

    async def load_all(self) -> bool:
        """
        Fetch every collection concurrently. On any failure the previous
        snapshot is kept as-is.
        """
        self.loading = True
        self.error = None
        try:
            fetches = [
                self.markets_repository.get_all(),
                self.managers_repository.get_all(),
                self.stores_repository.get_all(),
            ]
            if self.uses_assignment_table:
                fetches.append(self.assignments_repository.get_all())

            results = await asyncio.gather(*fetches, return_exceptions=True)
            for result in results:
                if isinstance(result, BaseException):
                    raise result

            self.markets, self.managers, self.stores = results[0], results[1], results[2]
            if self.uses_assignment_table:
                self.assignments = results[3]

            logger.info(
                f"Admin data loaded: {len(self.markets)} markets, "
                f"{len(self.managers)} managers, {len(self.stores)} stores"
            )
            return True
        except Exception as e:
            message = self._error_message(e, "Failed to load data")
            logger.error(f"Error loading admin data: {message}")
            self.error = message
            self._toast(message, ToastSeverity.ERROR)
            return False
        finally:
            self.loading = False

    async def refresh_data(self) -> bool:
        return await self.load_all()

    # ==================== MANAGERS ====================

    async def add_manager(
        self,
        name: str,
        email: str,
        password: str,
        market_id: Optional[int] = None
    ) -> bool:
        if not self._filled(name, email, password):
            self._toast("Please fill in all required fields", ToastSeverity.ERROR)
            return False

        return await self._mutate(
            lambda: self.managers_repository.create(name.strip(), email.strip(), password, market_id),
            success=f'Manager "{name.strip()}" created successfully!',
            failure="Failed to create manager",
            fallback="Error creating manager"
        )

    async def edit_manager(
        self,
        manager_id: int,
        name: str,
        email: str,
        password: Optional[str] = None,
        market_id: Optional[int] = None
    ) -> bool:
        if not self._filled(name, email):
            self._toast("Please fill in all required fields", ToastSeverity.ERROR)
            return False

        # A blank password means "keep the current one"
        new_password = password if password and password.strip() else None
        return await self._mutate(
            lambda: self.managers_repository.update(
                manager_id, name.strip(), email.strip(), new_password, market_id
            ),
            success="Manager updated successfully!",
            failure="Failed to update manager",
            fallback="Error updating manager"
        )

    async def delete_manager(self, manager_id: int) -> bool:
        async def _delete():
            await self._remove_manager_assignments(manager_id)
            return await self.managers_repository.delete(manager_id)

        return await self._mutate(
            _delete,
            success="Manager deleted successfully!",
            failure="Failed to delete manager",
            fallback="Error deleting manager"
        )

    # ==================== MARKETS ====================

    async def add_market(self, name: str) -> bool:
        if not self._filled(name):
            self._toast("Please enter a market name", ToastSeverity.ERROR)
            return False

        return await self._mutate(
            lambda: self.markets_repository.create(name.strip()),
            success="Market created successfully!",
            failure="Failed to create market",
            fallback="Error creating market"
        )

    async def edit_market(self, market_id: int, name: str) -> bool:
        if not self._filled(name):
            self._toast("Please enter a market name", ToastSeverity.ERROR)
            return False

        return await self._mutate(
            lambda: self.markets_repository.update(market_id, name.strip()),
            success="Market updated successfully!",
            failure="Failed to update market",
            fallback="Error updating market"
        )

    async def delete_market(self, market_id: int) -> bool:
        # Stores and managers of the market are orphaned, not deleted
        return await self._mutate(
            lambda: self.markets_repository.delete(market_id),
            success="Market deleted successfully!",
            failure="Failed to delete market",
            fallback="Error deleting market"
        )

    # ==================== STORES ====================

    async def add_store(
        self,
        name: str,
        market_id: Optional[int] = None,
        store_id: Optional[int] = None,
        manager_id: Optional[int] = None
    ) -> bool:
        if not self._filled(name):
            self._toast("Please enter a store name", ToastSeverity.ERROR)
            return False

        if store_id is not None:
            if store_id <= 0:
                self._toast("Store ID must be a positive number", ToastSeverity.ERROR)
                return False
            if any(store.id == store_id for store in self.stores):
                self._toast(f"Store ID {store_id} already exists", ToastSeverity.ERROR)
                return False

        async def _create():
            store = await self.stores_repository.create(
                name.strip(),
                market_id,
                store_id=store_id,
                manager_id=None if self.uses_assignment_table else manager_id
            )
            if store is not None and manager_id is not None and self.uses_assignment_table:
                assignment = await self.assignments_repository.assign(manager_id, store.id)
                if assignment is None:
                    self._toast("Store created, but the manager could not be assigned", ToastSeverity.WARNING)
            return store

        return await self._mutate(
            _create,
            success="Store created successfully!",
            failure="Failed to create store",
            fallback="Error creating store"
        )

    async def edit_store(
        self,
        store_id: int,
        name: str,
        market_id: Optional[int] = None,
        manager_id: Optional[int] = None
    ) -> bool:
        if not self._filled(name):
            self._toast("Please enter a store name", ToastSeverity.ERROR)
            return False

        async def _update():
            store = await self.stores_repository.update(
                store_id,
                name.strip(),
                market_id,
                manager_id=manager_id,
                assign_manager=not self.uses_assignment_table
            )
            if store is not None and self.uses_assignment_table:
                await self._sync_store_assignment(store_id, manager_id)
            return store

        return await self._mutate(
            _update,
            success="Store updated successfully!",
            failure="Failed to update store",
            fallback="Error updating store"
        )

    async def delete_store(self, store_id: int) -> bool:
        async def _delete():
            await self._remove_store_assignments(store_id)
            return await self.stores_repository.delete(store_id)

        return await self._mutate(
            _delete,
            success="Store deleted successfully!",
            failure="Failed to delete store",
            fallback="Error deleting store"
        )

    # ==================== ASSIGNMENT CLEANUP ====================

    async def _remove_store_assignments(self, store_id: int) -> bool:
        """
        Unassign every manager of a store. Failures are reported as a
        warning; the caller goes on with the delete.
        """
        try:
            manager_ids = await self.assignments_repository.get_assignments_for_store(store_id)
        except Exception as e:
            logger.error(f"Error fetching assignments of store {store_id}: {e}")
            self._toast("Could not clean up store assignments", ToastSeverity.WARNING)
            return False

        failed = []
        for manager_id in manager_ids:
            if not await self.assignments_repository.unassign(manager_id, store_id):
                failed.append(manager_id)

        if failed:
            logger.warning(f"Assignments of store {store_id} left behind for managers {failed}")
            self._toast("Could not clean up store assignments", ToastSeverity.WARNING)
            return False
        return True

    async def _remove_manager_assignments(self, manager_id: int) -> bool:
        try:
            store_ids = await self.assignments_repository.get_stores_for_manager(manager_id)
        except Exception as e:
            logger.error(f"Error fetching assignments of manager {manager_id}: {e}")
            self._toast("Could not clean up manager assignments", ToastSeverity.WARNING)
            return False

        failed = []
        for store_id in store_ids:
            if not await self.assignments_repository.unassign(manager_id, store_id):
                failed.append(store_id)

        if failed:
            logger.warning(f"Assignments of manager {manager_id} left behind for stores {failed}")
            self._toast("Could not clean up manager assignments", ToastSeverity.WARNING)
            return False
        return True

    async def _sync_store_assignment(self, store_id: int, manager_id: Optional[int]) -> bool:
        """Leave the store with exactly `manager_id` assigned (or none)"""
        try:
            current = await self.assignments_repository.get_assignments_for_store(store_id)
        except Exception as e:
            logger.error(f"Error fetching assignments of store {store_id}: {e}")
            self._toast("Store updated, but the manager assignment could not be changed", ToastSeverity.WARNING)
            return False

        ok = True
        for assigned_id in current:
            if assigned_id != manager_id:
                ok = await self.assignments_repository.unassign(assigned_id, store_id) and ok
        if manager_id is not None and manager_id not in current:
            ok = await self.assignments_repository.assign(manager_id, store_id) is not None and ok

        if not ok:
            self._toast("Store updated, but the manager assignment could not be changed", ToastSeverity.WARNING)
        return ok

    # ==================== DERIVED VIEWS ====================

    def _markets_by_id(self) -> Dict[int, Market]:
        return {market.id: market for market in self.markets}

    def _managers_by_id(self) -> Dict[int, MarketManager]:
        return {manager.id: manager for manager in self.managers}

    def market_name(self, market_id: Optional[int], default: str = NO_MARKET) -> str:
        market = self._markets_by_id().get(market_id) if market_id is not None else None
        return market.name if market else default

    def store_market_label(self, store: Store) -> str:
        return self.market_name(store.market_id, default=UNASSIGNED)

    def manager_id_for_store(self, store: Store) -> Optional[int]:
        if not self.uses_assignment_table:
            return store.manager_id
        for assignment in self.assignments:
            if assignment.store_id == store.id:
                return assignment.manager_id
        return None

    def store_manager_label(self, store: Store) -> str:
        manager_id = self.manager_id_for_store(store)
        manager = self._managers_by_id().get(manager_id) if manager_id is not None else None
        return manager.name if manager else UNASSIGNED

    def store_count(self, market_id: int) -> int:
        return sum(1 for store in self.stores if store.market_id == market_id)

    def manager_count(self, market_id: int) -> int:
        return sum(1 for manager in self.managers if manager.market_id == market_id)

    def dashboard(self) -> AdminDashboard:
        """View model of the current snapshot"""
        return AdminDashboard(
            counts=DashboardCounts(
                managers=len(self.managers),
                markets=len(self.markets),
                stores=len(self.stores)
            ),
            markets=[
                MarketSummary(
                    id=market.id,
                    name=market.name,
                    created_at=market.created_at,
                    store_count=self.store_count(market.id),
                    manager_count=self.manager_count(market.id)
                )
                for market in self.markets
            ],
            managers=[
                ManagerView(
                    id=manager.id,
                    name=manager.name,
                    email=manager.email,
                    market_id=manager.market_id,
                    market_name=self.market_name(manager.market_id),
                    created_at=manager.created_at
                )
                for manager in self.managers
            ],
            stores=[
                StoreView(
                    id=store.id,
                    store_name=store.store_name,
                    market_id=store.market_id,
                    market_name=self.store_market_label(store),
                    manager_id=self.manager_id_for_store(store),
                    manager_name=self.store_manager_label(store),
                    created_at=store.created_at
                )
                for store in self.stores
            ]
        )

    # ==================== HELPERS ====================

    async def _mutate(
        self,
        action: Callable[[], Awaitable[Any]],
        success: str,
        failure: str,
        fallback: str
    ) -> bool:
        try:
            result = await action()
        except Exception as e:
            message = self._error_message(e, fallback)
            logger.error(f"{fallback}: {message}")
            self._toast(message, ToastSeverity.ERROR)
            return False

        if not result:
            logger.warning(failure)
            self._toast(failure, ToastSeverity.ERROR)
            return False

        self._toast(success, ToastSeverity.SUCCESS)
        await self.load_all()
        return True

    def _toast(self, message: str, severity: ToastSeverity) -> None:
        self.notifier.show_toast(message, severity)

    @staticmethod
    def _filled(*values: Optional[str]) -> bool:
        return all(value is not None and value.strip() for value in values)

    @staticmethod
    def _error_message(error: Exception, fallback: str) -> str:
        if isinstance(error, BackendError):
            return error.message or fallback
        return str(error) or fallback
