from __future__ import annotations

"""Central logging configuration for multipage.

Import and call :func:`setup_logging` at application start-up. Embedding
hosts that configure logging themselves can skip it; every module logs to
``logging.getLogger(__name__)``.
"""

import logging
import logging.config
import os
from typing import List

from multipage.config import ConfigManager

__all__ = ["setup_logging"]

_TRUTHY = {'1', 'true', 'yes', 'on'}


def setup_logging() -> None:
    """Configure logging from the YAML ``logging`` section."""
    log_dir = os.environ.get("MULTIPAGE_LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, "multipage.log")

    try:
        logging_config = ConfigManager().get_logging_config()

        if logging_config and isinstance(logging_config, dict) and logging_config.get("version"):
            if "handlers" in logging_config and "file" in logging_config["handlers"]:
                logging_config["handlers"]["file"]["filename"] = log_file

            logging.config.dictConfig(logging_config)
            logging.getLogger("multipage").info("===== Logging initialised from config files =====")
        else:
            _setup_minimal_logging()
    except (ValueError, TypeError, AttributeError, ImportError, OSError) as exc:
        # dictConfig reports every configuration problem as one of these
        _setup_minimal_logging()
        logging.getLogger("multipage").error("Error loading logging config: %s", exc)

    _apply_debug_overrides()


def _setup_minimal_logging() -> None:
    """Set up minimal console-only logging when config is unavailable."""
    minimal_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'simple': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'simple',
                'level': 'INFO',
            },
        },
        'root': {
            'level': 'INFO',
            'handlers': ['console'],
        },
    }

    logging.config.dictConfig(minimal_config)
    logging.getLogger("multipage").warning("===== Logging initialised with minimal fallback =====")


def _debug_targets() -> List[str]:
    """Logger names to raise to DEBUG, from the environment.

    ``MULTIPAGE_DEBUG=1`` selects the whole ``multipage`` package;
    ``MULTIPAGE_DEBUG_MODULES=a,b`` adds individual loggers.
    """
    targets = []
    if os.environ.get('MULTIPAGE_DEBUG', '').strip().lower() in _TRUTHY:
        targets.append('multipage')
    modules = os.environ.get('MULTIPAGE_DEBUG_MODULES', '')
    targets.extend(name.strip() for name in modules.split(',') if name.strip())
    return targets


def _apply_debug_overrides() -> None:
    targets = _debug_targets()
    if not targets:
        return

    for name in targets:
        logging.getLogger(name).setLevel(logging.DEBUG)
    # Records reach the console through the package and root handlers; only
    # the loggers raised above produce DEBUG records, so opening them is safe.
    for handler in logging.getLogger('multipage').handlers + logging.getLogger().handlers:
        handler.setLevel(logging.DEBUG)
    logging.getLogger('multipage').info("Debug override active for: %s", ", ".join(targets))
