"""Resolve dotted class names to class objects."""

from __future__ import annotations

import importlib

from classrepo.errors import ClassNotFoundError, ClassNotInstanceOfError


def class_name(subject: type | str) -> str:
    """Return the fully qualified dotted name of a class or class name."""
    if isinstance(subject, type):
        return f"{subject.__module__}.{subject.__qualname__}"
    return subject


def resolve_class(dotted_name: str) -> type:
    module_name, _, attr_path = dotted_name.rpartition(".")
    if not module_name:
        raise ClassNotFoundError(f"The class name [{dotted_name}] has no module part.")

    # Nested classes: walk back until an importable module is found.
    parts = attr_path.split(".")
    while True:
        try:
            target: object = importlib.import_module(module_name)
            break
        except ModuleNotFoundError as exc:
            if exc.name != module_name:
                raise ClassNotFoundError(
                    f"The module for class [{dotted_name}] failed to import: {exc}"
                ) from exc
            module_name, sep, head = module_name.rpartition(".")
            if not sep:
                raise ClassNotFoundError(
                    f"The module for class [{dotted_name}] could not be imported."
                ) from exc
            parts.insert(0, head)
        except ImportError as exc:
            raise ClassNotFoundError(
                f"The module for class [{dotted_name}] failed to import: {exc}"
            ) from exc

    for part in parts:
        target = getattr(target, part, None)
        if target is None:
            break
    if not isinstance(target, type):
        raise ClassNotFoundError(f"The class [{dotted_name}] does not exist.")
    return target


def is_class_instance_of(target: type | str, expected: type | str) -> bool:
    """Whether target is expected itself or one of its subclasses."""
    target_cls = resolve_class(target) if isinstance(target, str) else target
    expected_cls = resolve_class(expected) if isinstance(expected, str) else expected
    return issubclass(target_cls, expected_cls)


def require_class_instance_of(target: type | str, expected: type | str) -> None:
    if not is_class_instance_of(target, expected):
        raise ClassNotInstanceOfError(
            f"The class [{class_name(target)}] is not an instance of [{class_name(expected)}]."
        )
