"""Module-based logging with run-based rotation.

Usage:
    # At run entry points (CLI, process_source, tests):
    from core.logging import configure_logging, start_run, end_run

    configure_logging("logs")
    start_run("notes-20250101-120000")
    try:
        # ... run the flow ...
    finally:
        end_run()

    # In modules:
    import logging
    logger = logging.getLogger(__name__)

Log files are created in logs/:
    - logs/flow.log, logs/extraction.log, logs/notes.log, ... (per module group)
    - logs/run-3p.log (all third-party libraries)
    - logs/*.previous.log (previous run's logs)
"""

from core.logging.configure import configure_logging
from core.logging.handlers import ModuleDispatchHandler, ThirdPartyHandler
from core.logging.run_manager import (
    MODULE_TO_LOG,
    end_run,
    get_current_run_id,
    module_to_log_name,
    start_run,
)

__all__ = [
    "configure_logging",
    "start_run",
    "end_run",
    "get_current_run_id",
    "module_to_log_name",
    "ModuleDispatchHandler",
    "ThirdPartyHandler",
    "MODULE_TO_LOG",
]
