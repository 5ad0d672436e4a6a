"""Exceptions raised by the flow engine."""


class FlowError(Exception):
    """Base flow engine exception."""

    pass


class FlowConfigurationError(FlowError):
    """The routing graph cannot be run as wired (cycle, duplicate names)."""

    pass


class NodeExecutionError(FlowError):
    """A node phase failed; carries the node identity and the phase name.

    The underlying exception is available as ``cause`` and as ``__cause__``.
    """

    def __init__(self, node_name: str, phase: str, cause: BaseException):
        self.node_name = node_name
        self.phase = phase
        self.cause = cause
        super().__init__(f"{node_name}.{phase} failed: {type(cause).__name__}: {cause}")


class BatchItemError(FlowError):
    """A batch item still failed after its retries and fallback."""

    def __init__(self, index: int, cause: BaseException):
        self.index = index
        self.cause = cause
        super().__init__(f"Batch item {index} failed: {type(cause).__name__}: {cause}")


class MaxStepsExceededError(FlowError):
    """A bounded flow ran more node activations than allowed."""

    def __init__(self, max_steps: int, last_node: str):
        self.max_steps = max_steps
        self.last_node = last_node
        super().__init__(f"Flow exceeded {max_steps} steps (last node: {last_node})")
