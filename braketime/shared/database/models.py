# braketime/shared/database/models.py
"""
Records of the hosted database.

The tables live in the hosted backend; these models only describe the rows
the API reads and writes. Ids are assigned by the backend.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class UserRole(str, Enum):
    ADMIN = "admin"
    MARKET_MANAGER = "market_manager"


class BackendRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")


class User(BackendRecord):
    """Row of `users` (credentials table), without the password"""
    id: int
    username: str
    role: str
    manager_id: Optional[int] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


class Market(BackendRecord):
    id: int
    name: str
    created_at: Optional[datetime] = None


class MarketManager(BackendRecord):
    id: int
    name: str
    email: str
    market_id: Optional[int] = None
    created_at: Optional[datetime] = None


class Store(BackendRecord):
    id: int
    store_name: str
    market_id: Optional[int] = None
    manager_id: Optional[int] = None
    created_at: Optional[datetime] = None


class Assignment(BackendRecord):
    """Row of `market_manager_stores`"""
    id: Optional[int] = None
    manager_id: int
    store_id: int
    assigned_at: Optional[datetime] = None
