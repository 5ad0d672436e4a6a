"""Run-based log rotation manager.

A "run" is one pass of a source through the note flow (or one test module).
The first record written to each log file inside a run rotates that file,
so every log holds exactly the current and the previous run.

Usage:
    from core.logging import start_run, end_run

    start_run("notes-20250101-120000")
    try:
        # ... run the flow ...
    finally:
        end_run()
"""

from contextvars import ContextVar

# ContextVars so concurrent async runs never see each other's rotation state
_current_run_id: ContextVar[str | None] = ContextVar("current_run_id", default=None)
_rotated_this_run: ContextVar[set[str] | None] = ContextVar("rotated_this_run", default=None)

# Module names never change, so this cache is shared across runs
_module_log_cache: dict[str, str] = {}

# Longest matching prefix wins; anything unmapped goes to "misc.log"
MODULE_TO_LOG = {
    # Orchestration engine
    "core.flow": "flow",
    # Collaborators
    "core.extraction": "extraction",
    "core.config": "config",
    "core.logging": "logging-internal",
    # Workflows
    "workflows.progressive_notes": "notes",
    "workflows.progressive_notes.nodes": "notes-nodes",
    "workflows.shared.llm_utils": "llm",
    "workflows.shared": "workflows-shared",
    # Tests
    "testing": "testing",
}

_SORTED_PREFIXES = sorted(MODULE_TO_LOG.keys(), key=len, reverse=True)


def start_run(run_id: str) -> None:
    """Signal start of a new run.

    Calling it again resets rotation tracking for the new run id.

    Args:
        run_id: Unique identifier for this run (timestamp, test name, ...)
    """
    _current_run_id.set(run_id)
    _rotated_this_run.set(set())


def end_run() -> None:
    """Signal end of run.

    Rotation is driven by start_run(), so a missed end_run() after a crash
    only leaves the run id dangling until the next start_run().
    """
    _current_run_id.set(None)
    _rotated_this_run.set(None)


def get_current_run_id() -> str | None:
    """Get the current run ID, if any."""
    return _current_run_id.get()


def should_rotate(log_name: str) -> bool:
    """Return True exactly once per log file per run.

    Args:
        log_name: The log file name (without .log extension)
    """
    run_id = _current_run_id.get()
    rotated = _rotated_this_run.get()

    if run_id is None or rotated is None:
        return False

    if log_name in rotated:
        return False

    rotated.add(log_name)
    return True


def module_to_log_name(module_name: str) -> str:
    """Resolve a module path to its log file name.

    Args:
        module_name: The __name__ of the module (e.g. "core.flow.node")

    Returns:
        Log file name without extension (e.g. "flow")
    """
    if module_name not in _module_log_cache:
        _module_log_cache[module_name] = _compute_log_name(module_name)
    return _module_log_cache[module_name]


def _compute_log_name(module_name: str) -> str:
    for prefix in _SORTED_PREFIXES:
        if module_name == prefix or module_name.startswith(prefix + "."):
            return MODULE_TO_LOG[prefix]
    return "misc"
