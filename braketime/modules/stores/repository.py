# braketime/modules/stores/repository.py
import logging
from typing import Any, Dict, List, Optional

from braketime.shared.database.models import Store
from braketime.shared.services.backend_client import BackendClient

logger = logging.getLogger(__name__)


class StoresRepository:
    table = "stores"

    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def get_all(self) -> List[Store]:
        rows = await self.backend.select(self.table)
        return [Store.model_validate(row) for row in rows]

    async def get_by_ids(self, store_ids: List[int]) -> List[Store]:
        if not store_ids:
            return []
        rows = await self.backend.select(self.table, filters={"id": list(store_ids)})
        return [Store.model_validate(row) for row in rows]

    async def create(
        self,
        store_name: str,
        market_id: Optional[int],
        store_id: Optional[int] = None,
        manager_id: Optional[int] = None
    ) -> Optional[Store]:
        """
        Create a store. `store_id` is sent as the primary key when given
        (manual numbering), otherwise the backend assigns one.
        """
        data: Dict[str, Any] = {"store_name": store_name, "market_id": market_id}
        if store_id is not None:
            data["id"] = store_id
        if manager_id is not None:
            data["manager_id"] = manager_id

        try:
            row = await self.backend.insert(self.table, data)
        except Exception as e:
            logger.error(f"Error creating store: {e}")
            return None
        return Store.model_validate(row) if row else None

    async def update(
        self,
        store_id: int,
        store_name: str,
        market_id: Optional[int],
        manager_id: Optional[int] = None,
        assign_manager: bool = True
    ) -> Optional[Store]:
        """
        Update name, market and (unless `assign_manager` is False) the
        manager column of a store. `manager_id=None` clears the manager.
        """
        data: Dict[str, Any] = {"store_name": store_name, "market_id": market_id}
        if assign_manager:
            data["manager_id"] = manager_id

        logger.info(f"📝 Updating store {store_id}: {data}")
        try:
            row = await self.backend.update(self.table, data, {"id": store_id})
        except Exception as e:
            logger.error(f"❌ Error updating store {store_id}: {e}")
            return None
        if row is None:
            logger.warning(f"Store {store_id} not found for update")
            return None
        return Store.model_validate(row)

    async def delete(self, store_id: int) -> bool:
        """Delete the store row; assignment rows must be removed first"""
        try:
            await self.backend.delete(self.table, {"id": store_id})
        except Exception as e:
            logger.error(f"❌ Error deleting store {store_id}: {e}")
            return False
        logger.info(f"✅ Store {store_id} deleted")
        return True
