"""Generic repository interface (Dependency Inversion Principle).

Service-layer code depends on these abstractions, never on the Django ORM
directly.  Concrete repositories are bound to one database alias so that
every repository handed out by a unit of work writes through the same
transaction.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

from django.db import DEFAULT_DB_ALIAS

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract."""

    def __init__(self, using: str = DEFAULT_DB_ALIAS) -> None:
        self._using = using

    @property
    def using(self) -> str:
        """Database alias all queries of this repository run against."""
        return self._using

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """Retrieve an entity by its primary key, ``None`` when missing."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist (create or update) an entity."""
