# braketime/modules/admin/schemas.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from braketime.core.notifications import ConfirmationPrompt, Toast
from braketime.shared.schemas.common import BaseResponse


# ==================== REQUESTS ====================

class MarketCreate(BaseModel):
    name: str = Field(..., description="Market name")

class MarketUpdate(BaseModel):
    name: str = Field(..., description="New market name")

class ManagerCreate(BaseModel):
    name: str
    email: str
    password: str
    market_id: Optional[int] = None

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "name": "John Doe",
            "email": "john@example.com",
            "password": "secret",
            "market_id": 1
        }
    })

class ManagerUpdate(BaseModel):
    name: str
    email: str
    password: Optional[str] = Field(None, description="Omit to keep the current password")
    market_id: Optional[int] = None

class StoreCreate(BaseModel):
    store_name: str
    market_id: Optional[int] = None
    store_id: Optional[int] = Field(None, description="Manual store number; assigned by the backend when omitted")
    manager_id: Optional[int] = None

class StoreUpdate(BaseModel):
    store_name: str
    market_id: Optional[int] = None
    manager_id: Optional[int] = None


# ==================== VIEWS ====================

class MarketSummary(BaseModel):
    id: int
    name: str
    created_at: Optional[datetime] = None
    store_count: int = 0
    manager_count: int = 0

class ManagerView(BaseModel):
    id: int
    name: str
    email: str
    market_id: Optional[int] = None
    market_name: str
    created_at: Optional[datetime] = None

class StoreView(BaseModel):
    id: int
    store_name: str
    market_id: Optional[int] = None
    market_name: str
    manager_id: Optional[int] = None
    manager_name: str
    created_at: Optional[datetime] = None

class DashboardCounts(BaseModel):
    managers: int
    markets: int
    stores: int

class AdminDashboard(BaseModel):
    counts: DashboardCounts
    markets: List[MarketSummary]
    managers: List[ManagerView]
    stores: List[StoreView]


# ==================== RESPONSES ====================

class AdminActionResponse(BaseResponse):
    notifications: List[Toast] = []

class ConfirmationRequiredResponse(BaseResponse):
    success: bool = False
    confirmation: ConfirmationPrompt

class AdminDashboardResponse(BaseResponse):
    dashboard: AdminDashboard
    notifications: List[Toast] = []
