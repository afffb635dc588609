"""Brake Time Admin - back office for markets, stores and market managers."""

__version__ = "1.0.0"
