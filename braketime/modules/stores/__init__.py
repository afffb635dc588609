# braketime/modules/stores/__init__.py
"""
Stores - the leaf entity, optionally tied to a market and a manager.

- repository.py: access to the `stores` table
"""

from .repository import StoresRepository

__all__ = ["StoresRepository"]
