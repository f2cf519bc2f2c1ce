#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
PktCrypt exception definitions
All application exception types in one place
"""

from typing import Any, Dict, Optional

from .enums import ErrorSeverity


class PktCryptError(Exception):
    """Base exception for the PktCrypt application"""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.context = context or {}

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception details to a dictionary"""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "severity": self.severity.name,
            "context": self.context,
        }


class ConfigurationError(PktCryptError):
    """Invalid key material, schedule rounds, port or settings"""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        kwargs.setdefault("severity", ErrorSeverity.HIGH)
        super().__init__(message, error_code="CONFIG_ERROR", **kwargs)
        self.config_key = config_key


class ProcessingError(PktCryptError):
    """Error raised while rewriting a capture"""

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        step_name: Optional[str] = None,
        **kwargs,
    ):
        kwargs.setdefault("error_code", "PROCESSING_ERROR")
        super().__init__(message, **kwargs)
        self.file_path = file_path
        self.step_name = step_name


class MalformedPayloadError(ProcessingError):
    """Payload too short to carry a position marker.

    Callers are expected to filter such payloads before they reach the
    flow cipher; the cipher refuses them instead of guessing.
    """

    def __init__(self, message: str, payload_length: int = 0, **kwargs):
        super().__init__(message, error_code="MALFORMED_PAYLOAD", **kwargs)
        self.payload_length = payload_length


class ValidationError(PktCryptError):
    """Input validation error"""

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        field_value: Optional[Any] = None,
        **kwargs,
    ):
        super().__init__(message, error_code="VALIDATION_ERROR", **kwargs)
        self.field_name = field_name
        self.field_value = field_value


class FileError(PktCryptError):
    """Capture file read/write error"""

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, error_code="FILE_ERROR", **kwargs)
        self.file_path = file_path
        self.operation = operation


def create_error_from_exception(exc: Exception, context: Optional[Dict[str, Any]] = None) -> PktCryptError:
    """Wrap a standard exception in the matching PktCrypt exception"""
    if isinstance(exc, PktCryptError):
        return exc

    error_message = str(exc)

    if isinstance(exc, (IOError, OSError)):
        return FileError(error_message, context=context)
    elif isinstance(exc, ValueError):
        return ValidationError(error_message, context=context)
    else:
        return PktCryptError(
            f"{type(exc).__name__}: {error_message}",
            error_code="UNKNOWN_ERROR",
            context=context,
        )


def format_error_for_user(error: PktCryptError) -> str:
    """Format an error message for display"""
    base_message = error.message

    if isinstance(error, FileError) and error.file_path:
        return f"{base_message}\nFile: {error.file_path}"
    elif isinstance(error, ProcessingError) and error.file_path:
        return f"{base_message}\nFile: {error.file_path}"
    elif isinstance(error, ConfigurationError) and error.config_key:
        return f"{base_message}\nSetting: {error.config_key}"

    return base_message
