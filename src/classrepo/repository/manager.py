"""Manage a unified, cached collection of class repositories.

Scanning folders for classes is slow, as every source file has to be
parsed. The manager caches the scan results in a single index file in a
cache folder, so later processes can fetch the class lists without
scanning again.

Usage as a direct ``find_classes_in_folder()`` replacement::

    with ClassRepositoryManager.create(cache_folder) as manager:
        repository = manager.find_classes_in_folder(folder, recursive=True)

Usage as a class locations manager: register loaders with
``register_class_loader()`` and fetch them with ``get_by_id()``.

Changes are written to disk by ``write_cache()``, which only writes when
something changed. ``close()`` (or leaving the ``with`` block) calls it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from pathlib import Path

from classrepo.classes.resolve import class_name
from classrepo.classes.scanner import find_classes_in_folder as scan_folder
from classrepo.config import get_settings
from classrepo.errors import (
    LoaderInvalidResultError,
    RepositoryExistsError,
    RepositoryNotFoundError,
)
from classrepo.ids import folder_cache_id
from classrepo.repository.store import IndexStore
from classrepo.repository.types import ClassRepository

logger = logging.getLogger(__name__)

# Identifies the cache file format. Changing it invalidates existing caches.
SYSTEM_VERSION = 1

Scanner = Callable[[Path, bool, str | None], list[str]]
ClassLoader = Callable[["ClassRepositoryManager"], ClassRepository]


def cache_file_name(version: int = SYSTEM_VERSION) -> str:
    return f"class-repository-v{version}.json"


def _now_iso() -> str:
    return datetime.now(UTC).replace(microsecond=0).isoformat()


class ClassRepositoryManager:
    def __init__(self, store: IndexStore, scanner: Scanner | None = None) -> None:
        self._store = store
        self._scanner: Scanner = scanner or scan_folder
        self._index: dict[str, list[str]] = {}
        self._repositories: dict[str, ClassRepository] = {}
        self._id_loaders: dict[str, ClassLoader] = {}
        self._modified = False
        self._closed = False
        self._load_index()

    @classmethod
    def create(
        cls,
        cache_folder: str | Path,
        scanner: Scanner | None = None,
    ) -> ClassRepositoryManager:
        """Create a manager that stores its cache file in the target folder."""
        folder = Path(cache_folder).expanduser()
        return cls(IndexStore(folder / cache_file_name(), SYSTEM_VERSION), scanner=scanner)

    def __enter__(self) -> ClassRepositoryManager:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def cache_folder(self) -> Path:
        return self._store.folder

    @property
    def cache_file(self) -> IndexStore:
        return self._store

    @property
    def modified(self) -> bool:
        return self._modified

    def ids(self) -> list[str]:
        """IDs present in the index, sorted."""
        return sorted(self._index)

    def _load_index(self) -> None:
        if self._store.exists():
            self._index = self._store.load()

    def find_classes_in_folder(
        self,
        folder: str | Path,
        recursive: bool = False,
        instance_of: type | str | None = None,
        repository_id: str | None = None,
    ) -> ClassRepository:
        """Return the classes in a folder, scanning it only on a cache miss.

        Args:
            folder: Folder to look for classes in.
            recursive: Whether to search recursively in subfolders.
            instance_of: Optional base class (or dotted name) to filter by.
            repository_id: Optional ID to fetch this cache later with
                ``get_by_id()``. Generated from the folder and options if
                not provided.
        """
        folder = Path(folder)
        filter_name = class_name(instance_of) if instance_of is not None else None
        if not repository_id:
            repository_id = folder_cache_id(folder, recursive, filter_name)

        repository = self.get_by_id(repository_id)
        if repository is not None:
            return repository

        logger.info("Class cache miss for %s, scanning %s", repository_id, folder)
        return self.initialize_cache(
            repository_id, self._scanner(folder, recursive, filter_name)
        )

    def get_by_id(self, repository_id: str) -> ClassRepository | None:
        repository = self._repositories.get(repository_id)
        if repository is not None:
            return repository

        if repository_id in self._index:
            repository = ClassRepository(repository_id, tuple(self._index[repository_id]))
            self._repositories[repository_id] = repository
            return repository

        if repository_id in self._id_loaders:
            return self._auto_load(repository_id)

        return None

    def require_by_id(self, repository_id: str) -> ClassRepository:
        """Like get_by_id(), but raises if the cache ID cannot be resolved."""
        repository = self.get_by_id(repository_id)
        if repository is not None:
            return repository

        raise RepositoryNotFoundError(
            f"The cache ID [{repository_id}] was not found in the class repository cache. "
            f"Use the method [{type(self).__name__}.id_exists] to check beforehand.",
            repository_id=repository_id,
        )

    def register_class_loader(
        self, repository_id: str, callback: ClassLoader
    ) -> ClassRepositoryManager:
        """Register a callback that builds the repository when it is missing.

        The callback is called with the manager and must return a
        ClassRepository, typically via ``find_classes_in_folder()`` or
        ``initialize_cache()``.
        """
        self._id_loaders[repository_id] = callback
        return self

    def unregister_class_loader(self, repository_id: str) -> ClassRepositoryManager:
        self._id_loaders.pop(repository_id, None)
        return self

    def has_class_loader(self, repository_id: str) -> bool:
        return repository_id in self._id_loaders

    def clear_id(self, repository_id: str) -> ClassRepositoryManager:
        """Forget a cache ID everywhere. Has no effect for unknown IDs."""
        if self._index.pop(repository_id, None) is not None:
            self._modified = True
        self._repositories.pop(repository_id, None)
        self._id_loaders.pop(repository_id, None)
        return self

    def clear_cache(self) -> ClassRepositoryManager:
        """Empty the cache and delete the cache file if it exists."""
        self._index = {}
        self._repositories = {}
        self._store.delete()
        return self

    def id_exists(self, repository_id: str) -> bool:
        return repository_id in self._index or repository_id in self._id_loaders

    def initialize_cache(
        self, repository_id: str, class_names: Iterable[str]
    ) -> ClassRepository:
        """Add a new cache ID with its classes, sorted by name."""
        if repository_id in self._index:
            raise RepositoryExistsError(
                f"The cache ID [{repository_id}] already exists in the class repository cache. "
                f"Use the method [{type(self).__name__}.get_by_id] to fetch the existing cache, "
                f"or use [{type(self).__name__}.id_exists] to check beforehand.",
                repository_id=repository_id,
            )

        self._modified = True
        self._index[repository_id] = sorted(class_names)
        # A loader may have materialized this ID before initializing it.
        self._repositories.pop(repository_id, None)
        logger.debug(
            "Initialized class cache %s (%d classes)",
            repository_id,
            len(self._index[repository_id]),
        )
        return self.require_by_id(repository_id)

    def _auto_load(self, repository_id: str) -> ClassRepository:
        logger.debug("Calling class loader for %s", repository_id)
        result = self._id_loaders[repository_id](self)

        if not isinstance(result, ClassRepository):
            raise LoaderInvalidResultError(
                f"The loader callback for cache ID [{repository_id}] returned an invalid result. "
                f"Expected an instance of [{class_name(ClassRepository)}], "
                f"but got [{type(result).__name__}].",
                repository_id=repository_id,
            )

        self._repositories[repository_id] = result
        return result

    def write_cache(self) -> ClassRepositoryManager:
        """Write the cache file, if anything changed since the last write."""
        if self._modified:
            self._store.write(self._index, _now_iso())
            self._modified = False
        return self

    def close(self) -> None:
        if self._closed:
            return
        if get_settings().auto_write:
            self.write_cache()
        else:
            logger.debug("Auto write disabled, leaving %s untouched", self._store.path)
        self._closed = True
