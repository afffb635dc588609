# braketime/modules/manager/__init__.py
"""
Manager dashboard - stores visible to a signed-in market manager.

Architecture:
- router.py: endpoints
- service.py: store lookup per manager
- schemas.py: response models
"""

from .router import router as manager_router
from .service import ManagerDashboardService

__all__ = [
    "manager_router",
    "ManagerDashboardService"
]
