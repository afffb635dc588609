# braketime/modules/manager/schemas.py
from typing import List, Optional

from pydantic import BaseModel

from braketime.shared.schemas.common import BaseResponse


class ManagerStoreView(BaseModel):
    store_id: int
    store_name: str
    market_name: str


class ManagerStoresResponse(BaseResponse):
    username: str
    manager_id: Optional[int] = None
    total_stores: int
    stores: List[ManagerStoreView]
