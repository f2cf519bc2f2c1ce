#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
PktCrypt Enumeration Definitions
"""

from enum import Enum, IntEnum


class Direction(Enum):
    """Traffic direction relative to the target port"""

    OUTBOUND = "outbound"  # destination port == target
    INBOUND = "inbound"  # source port == target


class LogLevel(IntEnum):
    """Log level enumeration"""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


class ErrorSeverity(IntEnum):
    """Error severity levels"""

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

