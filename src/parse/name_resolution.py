"""Callee resolution policies.

A resolution policy maps a call's callee name to a function entity, or
reports that it cannot. The call resolver records an edge either way, so a
policy only decides whether the edge gets a ``callee_id``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from index.function_index import FunctionIndex
    from models.functions import FunctionEntity


class CalleeResolver(Protocol):
    """Strategy interface for resolving a callee name to a function entity."""

    @property
    def name(self) -> str:
        """Policy name for logging and identification."""
        ...

    def resolve(
        self,
        callee_name: str,
        file_path: str,
        function_index: FunctionIndex,
    ) -> FunctionEntity | None: ...


class SameFileResolver:
    """Resolve a callee to the first same-named function in the calling file.

    Calls into other files are never resolved, and member calls are matched on
    the member name alone, so ``a.save()`` and ``b.save()`` resolve alike.
    """

    @property
    def name(self) -> str:
        return "same_file"

    def resolve(
        self,
        callee_name: str,
        file_path: str,
        function_index: FunctionIndex,
    ) -> FunctionEntity | None:
        return function_index.find_by_name(callee_name, file_path)


__all__ = ["CalleeResolver", "SameFileResolver"]
