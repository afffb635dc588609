# braketime/modules/managers/__init__.py
"""
Market managers - accounts scoped to the stores assigned to them.

- repository.py: access to the `market_managers` table
"""

from .repository import ManagersRepository

__all__ = ["ManagersRepository"]
