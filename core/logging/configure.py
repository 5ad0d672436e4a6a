"""Install the per-module file handlers on the root logger."""

import logging
import os
from pathlib import Path

from core.logging.handlers import FirstPartyFilter, ModuleDispatchHandler, ThirdPartyHandler

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_installed: list[logging.Handler] = []


def configure_logging(
    log_dir: str | Path | None = None,
    level: int = logging.INFO,
    console: bool = False,
) -> Path:
    """Route logs to per-module files under log_dir.

    Calling it again replaces the handlers installed by the previous call,
    so tests and the CLI can both call it without duplicating output.

    Args:
        log_dir: Target directory (default: $NOTES_LOG_DIR or ./logs)
        level: Root logger level
        console: Also echo first-party records to stderr

    Returns:
        The resolved log directory.
    """
    directory = Path(log_dir or os.environ.get("NOTES_LOG_DIR", "logs"))
    directory.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    for handler in _installed:
        root.removeHandler(handler)
        handler.close()
    _installed.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    module_handler = ModuleDispatchHandler(directory)
    module_handler.addFilter(FirstPartyFilter())
    third_party = ThirdPartyHandler(directory)
    third_party.addFilter(FirstPartyFilter(invert=True))
    handlers: list[logging.Handler] = [module_handler, third_party]

    if console:
        stream = logging.StreamHandler()
        stream.addFilter(FirstPartyFilter())
        handlers.append(stream)

    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
        _installed.append(handler)

    root.setLevel(level)
    return directory
