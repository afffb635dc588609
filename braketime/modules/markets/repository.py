# braketime/modules/markets/repository.py
import logging
from typing import List, Optional

from braketime.shared.database.models import Market
from braketime.shared.services.backend_client import BackendClient

logger = logging.getLogger(__name__)


class MarketsRepository:
    table = "markets"

    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def get_all(self) -> List[Market]:
        """All markets; backend errors propagate to the caller"""
        rows = await self.backend.select(self.table)
        return [Market.model_validate(row) for row in rows]

    async def create(self, name: str) -> Optional[Market]:
        try:
            row = await self.backend.insert(self.table, {"name": name})
        except Exception as e:
            logger.error(f"Error creating market: {e}")
            return None
        return Market.model_validate(row) if row else None

    async def update(self, market_id: int, name: str) -> Optional[Market]:
        try:
            row = await self.backend.update(self.table, {"name": name}, {"id": market_id})
        except Exception as e:
            logger.error(f"Error updating market {market_id}: {e}")
            return None
        if row is None:
            logger.warning(f"Market {market_id} not found for update")
            return None
        return Market.model_validate(row)

    async def delete(self, market_id: int) -> bool:
        try:
            await self.backend.delete(self.table, {"id": market_id})
        except Exception as e:
            logger.error(f"Error deleting market {market_id}: {e}")
            return False
        logger.info(f"Market {market_id} deleted")
        return True
