"""Cached class repositories."""

from classrepo.repository.manager import SYSTEM_VERSION, ClassRepositoryManager
from classrepo.repository.store import IndexStore
from classrepo.repository.types import ClassRepository

__all__ = ["SYSTEM_VERSION", "ClassRepository", "ClassRepositoryManager", "IndexStore"]
