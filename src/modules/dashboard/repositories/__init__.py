"""Sales reporting repositories package."""

from modules.dashboard.repositories.django_repository import SalesDjangoRepository
from modules.dashboard.repositories.interfaces import ISalesRepository

__all__ = ["ISalesRepository", "SalesDjangoRepository"]
