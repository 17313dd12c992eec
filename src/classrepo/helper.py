"""Process-default class repository manager."""

from __future__ import annotations

import logging
from pathlib import Path

from classrepo.config import get_settings
from classrepo.errors import CacheFolderNotSetError
from classrepo.repository.manager import ClassRepositoryManager
from classrepo.repository.types import ClassRepository

logger = logging.getLogger(__name__)

_manager: ClassRepositoryManager | None = None


def set_cache_folder(folder: str | Path) -> ClassRepositoryManager:
    """Install a default manager storing its cache in the given folder."""
    global _manager
    if _manager is not None:
        _manager.close()
    _manager = ClassRepositoryManager.create(folder)
    return _manager


def get_repository_manager() -> ClassRepositoryManager:
    if _manager is not None:
        return _manager

    cache_dir = get_settings().cache_dir.strip()
    if cache_dir:
        logger.debug("Creating default class repository manager in %s", cache_dir)
        return set_cache_folder(cache_dir)

    raise CacheFolderNotSetError(
        "Call [classrepo.helper.set_cache_folder] first, or set CLASSREPO_CACHE_DIR."
    )


def find_classes_in_repository(
    folder: str | Path,
    recursive: bool = False,
    instance_of: type | str | None = None,
) -> ClassRepository:
    """Cached variant of scanning a folder for classes, using the default manager."""
    return get_repository_manager().find_classes_in_folder(folder, recursive, instance_of)


def close_repository_manager() -> None:
    """Flush and uninstall the default manager."""
    global _manager
    if _manager is not None:
        _manager.close()
        _manager = None


def _reset() -> None:
    """Drop the default manager without flushing (for testing)."""
    global _manager
    _manager = None
