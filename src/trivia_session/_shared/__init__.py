# Area: Shared
"""
Shared infrastructure: logging setup.
"""

from .logging_config import JSONFormatter, TerminalFormatter, log_event, setup_logging

__all__ = ["JSONFormatter", "TerminalFormatter", "log_event", "setup_logging"]
