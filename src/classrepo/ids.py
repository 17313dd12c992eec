"""Identifier helpers."""

import hashlib
import os
from pathlib import Path


def bool_to_string(value: bool) -> str:
    return "true" if value else "false"


def folder_cache_id(folder: Path, recursive: bool, instance_of: str | None) -> str:
    """Derive a stable cache ID for a folder scan and its options."""
    real_path = os.path.realpath(folder)
    seed = f"auto-generated-hash-{real_path}-{bool_to_string(recursive)}-{instance_of or ''}"
    return hashlib.md5(seed.encode("utf-8")).hexdigest()
