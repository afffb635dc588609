# braketime/modules/assignments/repository.py
import logging
from typing import List, Optional

from braketime.shared.database.models import Assignment
from braketime.shared.services.backend_client import BackendClient

logger = logging.getLogger(__name__)


class AssignmentsRepository:
    """Manager-store join table (`market_manager_stores`)"""

    table = "market_manager_stores"

    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def get_all(self) -> List[Assignment]:
        rows = await self.backend.select(self.table)
        return [Assignment.model_validate(row) for row in rows]

    async def assign(self, manager_id: int, store_id: int) -> Optional[Assignment]:
        try:
            row = await self.backend.insert(
                self.table,
                {"manager_id": manager_id, "store_id": store_id}
            )
        except Exception as e:
            logger.error(f"Error assigning manager {manager_id} to store {store_id}: {e}")
            return None
        return Assignment.model_validate(row) if row else None

    async def unassign(self, manager_id: int, store_id: int) -> bool:
        try:
            await self.backend.delete(
                self.table,
                {"manager_id": manager_id, "store_id": store_id}
            )
        except Exception as e:
            logger.error(f"Error unassigning manager {manager_id} from store {store_id}: {e}")
            return False
        return True

    async def get_assignments_for_store(self, store_id: int) -> List[int]:
        """Ids of the managers assigned to a store"""
        rows = await self.backend.select(self.table, columns="manager_id", filters={"store_id": store_id})
        return [row["manager_id"] for row in rows]

    async def get_stores_for_manager(self, manager_id: int) -> List[int]:
        """Ids of the stores assigned to a manager"""
        rows = await self.backend.select(self.table, columns="store_id", filters={"manager_id": manager_id})
        return [row["store_id"] for row in rows]
