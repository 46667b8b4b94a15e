"""Registry mapping (function, file) to a runtime trigger description."""

from __future__ import annotations

from models.triggers import TriggerEntry
from utils import normalize_path


class TriggerIndex:
    """Mutable, rebuild-from-scratch store of trigger entries.

    File paths are normalised on both insertion and lookup, so callers may
    pass ``src/./app.tsx`` and ``src/app.tsx`` interchangeably.
    """

    def __init__(self) -> None:
        self._triggers: list[TriggerEntry] = []

    def __len__(self) -> int:
        return len(self._triggers)

    def clear(self) -> None:
        self._triggers = []

    def add(self, entry: TriggerEntry) -> None:
        self._triggers.append(
            entry.model_copy(update={"file_path": normalize_path(entry.file_path)})
        )

    def get_all(self) -> list[TriggerEntry]:
        return list(self._triggers)

    def find(self, function_name: str, file_path: str) -> TriggerEntry | None:
        """First trigger registered for ``function_name`` in ``file_path``."""
        normalized = normalize_path(file_path)
        for entry in self._triggers:
            if entry.function_name == function_name and entry.file_path == normalized:
                return entry
        return None


__all__ = ["TriggerIndex"]
