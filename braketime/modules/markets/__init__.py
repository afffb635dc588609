# braketime/modules/markets/__init__.py
"""
Markets - top-level grouping for stores and managers.

- repository.py: access to the `markets` table
"""

from .repository import MarketsRepository

__all__ = ["MarketsRepository"]
