# braketime/modules/managers/repository.py
import logging
from typing import Any, Dict, List, Optional

from braketime.core.auth.service import AuthService
from braketime.shared.database.models import MarketManager
from braketime.shared.services.backend_client import BackendClient

logger = logging.getLogger(__name__)


class ManagersRepository:
    table = "market_managers"

    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def get_all(self) -> List[MarketManager]:
        rows = await self.backend.select(self.table, columns="id,name,email,market_id,created_at")
        return [MarketManager.model_validate(row) for row in rows]

    async def create(
        self,
        name: str,
        email: str,
        password: str,
        market_id: Optional[int]
    ) -> Optional[MarketManager]:
        data = {
            "name": name,
            "email": email,
            "password": AuthService.get_password_hash(password),
            "market_id": market_id
        }
        try:
            row = await self.backend.insert(self.table, data)
        except Exception as e:
            logger.error(f"Error creating manager: {e}")
            return None
        return MarketManager.model_validate(row) if row else None

    async def update(
        self,
        manager_id: int,
        name: str,
        email: str,
        password: Optional[str] = None,
        market_id: Optional[int] = None
    ) -> Optional[MarketManager]:
        """
        Update a manager. The password is only sent when given, so an
        omitted password leaves the stored credential untouched.
        """
        data: Dict[str, Any] = {"name": name, "email": email, "market_id": market_id}
        if password:
            data["password"] = AuthService.get_password_hash(password)

        try:
            row = await self.backend.update(self.table, data, {"id": manager_id})
        except Exception as e:
            logger.error(f"Error updating manager {manager_id}: {e}")
            return None
        if row is None:
            logger.warning(f"Manager {manager_id} not found for update")
            return None
        return MarketManager.model_validate(row)

    async def delete(self, manager_id: int) -> bool:
        """Delete the manager row; assignment rows must be removed first"""
        try:
            await self.backend.delete(self.table, {"id": manager_id})
        except Exception as e:
            logger.error(f"Error deleting manager {manager_id}: {e}")
            return False
        logger.info(f"Manager {manager_id} deleted")
        return True
