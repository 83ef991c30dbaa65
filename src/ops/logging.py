"""
Logging setup.
"""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_PATH = "logs/ar_tracking.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_path: str = DEFAULT_LOG_PATH, log_level: str = "INFO") -> None:
    """Log to `log_path` and stderr. Calling again replaces the handlers."""
    log_dir = os.path.dirname(log_path)
    if log_dir and not os.path.exists(log_dir):
        os.makedirs(log_dir)

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(log_path),
            logging.StreamHandler(),
        ],
        force=True,
    )
