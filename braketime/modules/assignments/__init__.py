# braketime/modules/assignments/__init__.py
"""
Assignments - explicit manager-store relationships.

- repository.py: access to the `market_manager_stores` join table
"""

from .repository import AssignmentsRepository

__all__ = ["AssignmentsRepository"]
