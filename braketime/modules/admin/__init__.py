# braketime/modules/admin/__init__.py
"""
Admin module - back office for markets, market managers and stores.

- Load markets, managers and stores as one consistent snapshot
- Create, edit and delete each entity, reloading after every change
- Clean up manager-store assignments before deleting managers or stores
- Derived labels ("No Market", "Unassigned") and per-market counts

Architecture:
- router.py: FastAPI endpoints
- service.py: AdminDataService, the data orchestrator
- schemas.py: request, view and response models
"""

from .router import router as admin_router
from .service import AdminDataService

__all__ = [
    "admin_router",
    "AdminDataService"
]
