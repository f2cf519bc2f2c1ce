#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
PktCrypt constants
Central place for values that would otherwise be hardcoded
"""


class CipherConstants:
    """Keystream and marker related constants"""

    # RC4 state
    STATE_SIZE = 256
    DEFAULT_SCHEDULE_ROUNDS = 1

    # Key material
    KEY_LENGTH = 16
    INVERTED_PORT_PREFIX = "int:"

    # Position marker: big-endian uint16 in units of MARKER_UNIT keystream bytes
    MARKER_SIZE = 2
    MARKER_UNIT = 4


class ProcessingConstants:
    """Processing-related constants"""

    SUPPORTED_EXTENSIONS = (".pcap", ".pcapng")
    PCAPNG_EXTENSION = ".pcapng"

    # Log a progress line every N records
    DEFAULT_PROGRESS_INTERVAL = 10000


class FileConstants:
    """File and path related constants"""

    # Configuration files
    CONFIG_DIR_NAME = ".pktcrypt"
    DEFAULT_CONFIG_FILE = "config.yaml"

    # Log files
    LOG_FILE_NAME = "pktcrypt.log"
    LOG_LEVEL_ENV_VAR = "PKTCRYPT_LOG_LEVEL"
    LOG_MAX_SIZE = 10 * 1024 * 1024  # 10MB
    LOG_BACKUP_COUNT = 5


class NetworkConstants:
    """Network-related constants"""

    MIN_PORT = 1
    MAX_PORT = 65535

    UDP_HEADER_LENGTH = 8


class ValidationConstants:
    """Validation-related constants"""

    MIN_FILE_SIZE = 24  # Minimum pcap file header size
    VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
    VALID_OUTPUT_FORMATS = ("pcap", "pcapng")
