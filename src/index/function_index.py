"""Registry of function entities with point (line) lookup."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from models.functions import FunctionEntity


class FunctionIndex:
    """Mutable, rebuild-from-scratch store of function entities.

    Entities are kept in insertion order and bucketed per file so that
    point-containment lookups only scan the entities of one file.
    """

    def __init__(self) -> None:
        self._functions: list[FunctionEntity] = []
        self._by_file: dict[str, list[FunctionEntity]] = {}

    def __len__(self) -> int:
        return len(self._functions)

    def clear(self) -> None:
        self._functions = []
        self._by_file = {}

    def add(self, entity: FunctionEntity) -> None:
        self._functions.append(entity)
        self._by_file.setdefault(entity.file_path, []).append(entity)

    def extend(self, entities: Iterable[FunctionEntity]) -> None:
        for entity in entities:
            self.add(entity)

    def get_all(self) -> list[FunctionEntity]:
        return list(self._functions)

    def get_for_file(self, file_path: str) -> list[FunctionEntity]:
        return list(self._by_file.get(file_path, ()))

    def find_by_line(self, file_path: str, line: int) -> FunctionEntity | None:
        """Return the innermost entity of ``file_path`` whose range contains ``line``.

        The entity with the greatest start line wins; on equal start lines the
        most recently registered one (the inner construct in pre-order) wins.
        """
        best: FunctionEntity | None = None
        for entity in self._by_file.get(file_path, ()):
            if not entity.contains_line(line):
                continue
            if best is None or entity.start_line >= best.start_line:
                best = entity
        return best

    def find_by_name(self, name: str, file_path: str) -> FunctionEntity | None:
        """Return the first entity of ``file_path`` named ``name``."""
        for entity in self._by_file.get(file_path, ()):
            if entity.name == name:
                return entity
        return None


__all__ = ["FunctionIndex"]
