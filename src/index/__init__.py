"""Per-session registries built by an indexing pass."""

from index.call_graph import CallGraphIndex
from index.function_index import FunctionIndex
from index.trigger_index import TriggerIndex

__all__ = ["CallGraphIndex", "FunctionIndex", "TriggerIndex"]
