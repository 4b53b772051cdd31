"""Routine catalogs."""

from procunit.catalog.base import RoutineCatalog
from procunit.catalog.postgres import PostgresCatalog

__all__ = ["PostgresCatalog", "RoutineCatalog"]
