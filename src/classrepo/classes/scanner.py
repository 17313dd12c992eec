"""Find the classes declared in the Python files of a folder.

Files are parsed with ``ast`` rather than imported, so scanning has no side
effects. Only when a base class filter is given are the found classes
imported, to check them with ``issubclass``. For that, the folder (or its
top-level package) must be importable.
"""

from __future__ import annotations

import ast
import logging
from pathlib import Path

from classrepo.classes.resolve import class_name, is_class_instance_of

logger = logging.getLogger(__name__)


def _iter_python_files(folder: Path, recursive: bool) -> list[Path]:
    pattern = "**/*.py" if recursive else "*.py"
    files: list[Path] = []
    for path in sorted(folder.glob(pattern)):
        relative = path.relative_to(folder)
        if any(part == "__pycache__" or part.startswith(".") for part in relative.parts[:-1]):
            continue
        if path.is_file():
            files.append(path)
    return files


def _package_prefix(folder: Path) -> list[str]:
    prefix: list[str] = []
    current = folder
    while (current / "__init__.py").is_file():
        prefix.insert(0, current.name)
        current = current.parent
    return prefix


def module_name_for(path: Path, folder: Path) -> str:
    """Dotted module path of a file inside the scanned folder."""
    parts = _package_prefix(folder) + list(path.relative_to(folder).with_suffix("").parts)
    if parts[-1] == "__init__":
        parts.pop()
    return ".".join(parts)


def parse_class_names(path: Path) -> list[str]:
    """Names of the top-level classes declared in a Python source file."""
    try:
        tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    except (SyntaxError, UnicodeDecodeError, ValueError):
        logger.warning("Skipping unparsable file: %s", path, exc_info=True)
        return []
    return [node.name for node in tree.body if isinstance(node, ast.ClassDef)]


def find_classes_in_folder(
    folder: Path,
    recursive: bool = False,
    instance_of: type | str | None = None,
) -> list[str]:
    """Return the fully qualified names of the classes found in a folder."""
    folder = Path(folder).resolve()
    found: list[str] = []
    for path in _iter_python_files(folder, recursive):
        module_name = module_name_for(path, folder)
        for name in parse_class_names(path):
            found.append(f"{module_name}.{name}" if module_name else name)

    logger.info(
        "Scanned %s for classes: %d found (recursive=%s)", folder, len(found), recursive
    )

    if instance_of is None:
        return found

    expected = class_name(instance_of)
    return [name for name in found if is_class_instance_of(name, expected)]
