"""Types for cached class repositories."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ClassRepository:
    """A collection of classes as loaded by the ClassRepositoryManager."""

    id: str
    classes: tuple[str, ...]

    def get_id(self) -> str:
        return self.id

    def get_classes(self) -> list[str]:
        return list(self.classes)

    def __len__(self) -> int:
        return len(self.classes)

    def __contains__(self, class_name: object) -> bool:
        return class_name in self.classes
