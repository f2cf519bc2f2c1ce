"""
Common module for PktCrypt
Constants, enumerations and exception definitions
"""

from .constants import (
    CipherConstants,
    FileConstants,
    NetworkConstants,
    ProcessingConstants,
    ValidationConstants,
)
from .enums import Direction, ErrorSeverity, LogLevel
from .exceptions import (
    ConfigurationError,
    FileError,
    MalformedPayloadError,
    PktCryptError,
    ProcessingError,
    ValidationError,
)

__all__ = [
    "CipherConstants",
    "ProcessingConstants",
    "FileConstants",
    "NetworkConstants",
    "ValidationConstants",
    "Direction",
    "ErrorSeverity",
    "LogLevel",
    "PktCryptError",
    "ConfigurationError",
    "FileError",
    "MalformedPayloadError",
    "ProcessingError",
    "ValidationError",
]
