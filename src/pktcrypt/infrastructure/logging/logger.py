#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
PktCrypt logging system
Unified logger management
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

from ...common.constants import FileConstants
from ...common.enums import LogLevel


class PktCryptLogger:
    """Application logger manager"""

    _instance: Optional["PktCryptLogger"] = None
    _initialized: bool = False

    def __new__(cls) -> "PktCryptLogger":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if PktCryptLogger._initialized:
            return

        self._loggers: Dict[str, logging.Logger] = {}
        self._setup_root_logger()
        PktCryptLogger._initialized = True

    def _setup_root_logger(self):
        """Configure the ``pktcrypt`` root logger"""
        root_logger = logging.getLogger("pktcrypt")
        root_logger.setLevel(logging.DEBUG)

        # Avoid adding handlers twice
        if root_logger.handlers:
            return

        console_level = logging.INFO
        log_to_file = True
        max_size = FileConstants.LOG_MAX_SIZE
        backup_count = FileConstants.LOG_BACKUP_COUNT
        try:
            from ...config import get_app_config

            config = get_app_config()
            level_str = config.logging.log_level.upper()
            console_level = getattr(logging, level_str, logging.INFO)
            log_to_file = config.logging.log_to_file
            max_size = config.logging.log_file_max_size
            backup_count = config.logging.log_backup_count
        except Exception:
            # Fall back to defaults when the configuration cannot be read
            pass

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(console_level)
        console_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

        if log_to_file:
            try:
                log_dir = Path.home() / FileConstants.CONFIG_DIR_NAME
                log_dir.mkdir(exist_ok=True)
                log_file = log_dir / FileConstants.LOG_FILE_NAME

                file_handler = RotatingFileHandler(
                    log_file,
                    maxBytes=max_size,
                    backupCount=backup_count,
                    encoding="utf-8",
                )
                file_handler.setLevel(logging.DEBUG)
                file_formatter = logging.Formatter(
                    "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
                file_handler.setFormatter(file_formatter)
                root_logger.addHandler(file_handler)
            except Exception as e:
                # Console logging stays available even if the log file is not
                root_logger.warning(f"Failed to setup file logging: {e}")

        self._loggers["root"] = root_logger

    def get_logger(self, name: str) -> logging.Logger:
        """Return the logger ``pktcrypt.<name>``"""
        if name not in self._loggers:
            logger = logging.getLogger(f"pktcrypt.{name}")
            self._loggers[name] = logger
        return self._loggers[name]

    def set_level(self, level: LogLevel):
        """Set the level of every console handler on the root logger"""
        root_logger = logging.getLogger("pktcrypt")
        for handler in root_logger.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, RotatingFileHandler):
                handler.setLevel(int(level))

    def reconfigure_from_config(self, config=None):
        """Re-apply the console level from ``config`` or the global configuration"""
        try:
            if config is None:
                from ...config import get_app_config

                config = get_app_config()
            level_str = config.logging.log_level.upper()
            self.set_level(LogLevel(getattr(logging, level_str, logging.INFO)))
        except Exception as e:
            logging.getLogger("pktcrypt").warning(f"Failed to reconfigure logging system: {e}")

        # The environment override always wins over configuration files
        self.apply_env_level()

    def apply_env_level(self) -> Optional[LogLevel]:
        """Apply the PKTCRYPT_LOG_LEVEL override to the console handlers, if set"""
        level_name = os.environ.get(FileConstants.LOG_LEVEL_ENV_VAR, "").upper()
        if level_name not in LogLevel.__members__:
            return None
        level = LogLevel[level_name]
        self.set_level(level)
        return level

    def log_exception(self, logger_name: str, exc: Exception, context: Optional[Dict[str, Any]] = None):
        """Log an exception with traceback"""
        logger = self.get_logger(logger_name)
        context_str = ""
        if context:
            context_str = f" Context: {context}"
        logger.error(
            f"Exception occurred: {type(exc).__name__}: {exc}{context_str}",
            exc_info=True,
        )

    def log_performance(self, logger_name: str, operation: str, duration: float, **kwargs):
        """Log the duration of an operation"""
        logger = self.get_logger(logger_name)
        extra_info = " ".join(f"{k}={v}" for k, v in kwargs.items())
        logger.info(f"Performance: {operation} took {duration:.3f}s {extra_info}")


# Global logger manager
_logger_manager = PktCryptLogger()


def get_logger(name: str = "root") -> logging.Logger:
    return _logger_manager.get_logger(name)


def set_log_level(level: LogLevel):
    _logger_manager.set_level(level)


def reconfigure_logging(config=None):
    _logger_manager.reconfigure_from_config(config)


def apply_env_log_level() -> Optional[LogLevel]:
    return _logger_manager.apply_env_level()


def log_exception(exc: Exception, logger_name: str = "root", context: Optional[Dict[str, Any]] = None):
    _logger_manager.log_exception(logger_name, exc, context)


def log_performance(operation: str, duration: float, logger_name: str = "performance", **kwargs):
    _logger_manager.log_performance(logger_name, operation, duration, **kwargs)
