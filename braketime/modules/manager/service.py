# braketime/modules/manager/service.py
import asyncio
import logging
from typing import List, Optional, Set

from braketime.config.settings import settings
from braketime.modules.assignments.repository import AssignmentsRepository
from braketime.modules.markets.repository import MarketsRepository
from braketime.modules.stores.repository import StoresRepository
from .schemas import ManagerStoreView

logger = logging.getLogger(__name__)


class ManagerDashboardService:
    """Read-only view of the stores assigned to one market manager"""

    def __init__(
        self,
        stores_repository: StoresRepository,
        markets_repository: MarketsRepository,
        assignments_repository: AssignmentsRepository,
        store_manager_mode: Optional[str] = None
    ):
        self.stores_repository = stores_repository
        self.markets_repository = markets_repository
        self.assignments_repository = assignments_repository
        self.store_manager_mode = store_manager_mode or settings.store_manager_mode

    async def get_assigned_stores(self, manager_id: Optional[int]) -> List[ManagerStoreView]:
        """
        Stores assigned to the manager, with their market name
        ("Unassigned" when the market is missing). Errors yield an empty list.
        """
        if manager_id is None:
            logger.info("No manager_id on session, no stores to show")
            return []

        try:
            stores, markets, assigned_ids = await asyncio.gather(
                self.stores_repository.get_all(),
                self.markets_repository.get_all(),
                self._assigned_store_ids(manager_id)
            )
        except Exception as e:
            logger.error(f"Error loading manager data: {e}")
            return []

        market_names = {market.id: market.name for market in markets}
        views = []
        for store in stores:
            if assigned_ids is None:
                if store.manager_id != manager_id:
                    continue
            elif store.id not in assigned_ids:
                continue
            views.append(ManagerStoreView(
                store_id=store.id,
                store_name=store.store_name,
                market_name=market_names.get(store.market_id, "Unassigned")
            ))

        logger.info(f"Loaded {len(views)} stores for manager {manager_id}")
        return views

    async def _assigned_store_ids(self, manager_id: int) -> Optional[Set[int]]:
        # Column mode reads the manager straight off the store rows
        if self.store_manager_mode != "assignment":
            return None
        return set(await self.assignments_repository.get_stores_for_manager(manager_id))
