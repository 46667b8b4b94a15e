"""Record models for callchain indices, inputs and projections."""

from models.calls import UNKNOWN_CALLEE, CallEdge
from models.diagnostics import (
    OUTSIDE_FUNCTION,
    Diagnostic,
    DiagnosticAttribution,
    DiagnosticReport,
)
from models.functions import FunctionEntity, FunctionKind, build_function_id
from models.graph import (
    GraphEdge,
    GraphNode,
    GraphView,
    RoadmapFile,
    RoadmapFunction,
)
from models.sources import SourceFile
from models.triggers import TriggerEntry

__all__ = [
    "OUTSIDE_FUNCTION",
    "UNKNOWN_CALLEE",
    "CallEdge",
    "Diagnostic",
    "DiagnosticAttribution",
    "DiagnosticReport",
    "FunctionEntity",
    "FunctionKind",
    "GraphEdge",
    "GraphNode",
    "GraphView",
    "RoadmapFile",
    "RoadmapFunction",
    "SourceFile",
    "TriggerEntry",
    "build_function_id",
]
