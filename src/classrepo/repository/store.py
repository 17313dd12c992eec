"""Persistent storage of the cache ID -> class names index."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from classrepo.errors import CacheClearFailedError, StoreCorruptError

logger = logging.getLogger(__name__)

NOTICE = "Class repository cache file - do not edit. Changes will be overwritten."
OWNER = "classrepo.repository.manager.ClassRepositoryManager"


def _decode_index(path: Path, decoded: object) -> dict[str, list[str]]:
    if not isinstance(decoded, dict):
        raise StoreCorruptError(f"The cache file [{path}] does not contain a JSON object.")
    repositories = decoded.get("repositories")
    if not isinstance(repositories, dict):
        raise StoreCorruptError(f"The cache file [{path}] has no repositories mapping.")

    index: dict[str, list[str]] = {}
    for repository_id, classes in repositories.items():
        if not isinstance(classes, list) or not all(isinstance(name, str) for name in classes):
            raise StoreCorruptError(
                f"The cache file [{path}] holds an invalid class list for [{repository_id}].",
                repository_id=repository_id,
            )
        index[repository_id] = list(classes)
    return index


class IndexStore:
    """A single JSON file mapping cache IDs to sorted class name lists."""

    def __init__(self, path: Path, version: int) -> None:
        self.path = path
        self.version = version

    @property
    def folder(self) -> Path:
        return self.path.parent

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> dict[str, list[str]]:
        try:
            decoded = json.loads(self.path.read_text(encoding="utf-8"))
        except UnicodeDecodeError as exc:
            raise StoreCorruptError(
                f"The cache file [{self.path}] is not valid UTF-8: {exc.reason}."
            ) from exc
        except json.JSONDecodeError as exc:
            raise StoreCorruptError(
                f"The cache file [{self.path}] is not valid JSON: {exc.msg}."
            ) from exc
        index = _decode_index(self.path, decoded)
        logger.debug("Loaded class repository index %s (%d ids)", self.path, len(index))
        return index

    def write(self, index: dict[str, list[str]], generated_at: str) -> None:
        payload = {
            "notice": NOTICE,
            "generated_at": generated_at,
            "see": OWNER,
            "version": self.version,
            "repositories": index,
        }
        encoded = json.dumps(payload, sort_keys=True, indent=2)

        self.folder.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.folder
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(encoded + "\n")
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.info("Wrote class repository cache %s (%d ids)", self.path, len(index))

    def delete(self) -> None:
        if not self.path.exists():
            return
        try:
            self.path.unlink()
        except OSError as exc:
            raise CacheClearFailedError(
                f"Failed to delete the class repository cache file [{self.path}]."
            ) from exc
        logger.info("Deleted class repository cache %s", self.path)
