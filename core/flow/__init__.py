"""Minimal async graph execution engine.

Nodes expose prepare/execute/finalize; a Flow threads one shared state
object through them, choosing each successor by the label finalize returns.
"""

from core.flow.errors import (
    BatchItemError,
    FlowConfigurationError,
    FlowError,
    MaxStepsExceededError,
    NodeExecutionError,
)
from core.flow.flow import Flow, FlowResult
from core.flow.node import DEFAULT_ACTION, BatchNode, ExecutionRecord, Node, RetryPolicy

__all__ = [
    "DEFAULT_ACTION",
    "BatchItemError",
    "BatchNode",
    "ExecutionRecord",
    "Flow",
    "FlowConfigurationError",
    "FlowError",
    "FlowResult",
    "MaxStepsExceededError",
    "Node",
    "NodeExecutionError",
    "RetryPolicy",
]
