"""Cached discovery of the classes declared in source folders."""

from classrepo.classes.scanner import find_classes_in_folder
from classrepo.helper import find_classes_in_repository, get_repository_manager, set_cache_folder
from classrepo.repository import SYSTEM_VERSION, ClassRepository, ClassRepositoryManager

__all__ = [
    "SYSTEM_VERSION",
    "ClassRepository",
    "ClassRepositoryManager",
    "find_classes_in_folder",
    "find_classes_in_repository",
    "get_repository_manager",
    "set_cache_folder",
]
