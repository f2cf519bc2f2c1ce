"""
Logging infrastructure for PktCrypt
Unified logging management system
"""

from .logger import (
    PktCryptLogger,
    apply_env_log_level,
    get_logger,
    log_exception,
    log_performance,
    reconfigure_logging,
    set_log_level,
)

__all__ = [
    "PktCryptLogger",
    "get_logger",
    "log_performance",
    "log_exception",
    "set_log_level",
    "reconfigure_logging",
    "apply_env_log_level",
]
