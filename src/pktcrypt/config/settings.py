"""
Configuration system

Dataclass settings for the keystream, capture processing and logging,
loaded from and saved to YAML (or JSON) in the user's config directory.
"""
import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

import yaml

from ..common.constants import (
    CipherConstants,
    FileConstants,
    ProcessingConstants,
    ValidationConstants,
)

logger = logging.getLogger(__name__)


@dataclass
class CipherSettings:
    """Keystream settings"""
    schedule_rounds: int = CipherConstants.DEFAULT_SCHEDULE_ROUNDS
    key_length: int = CipherConstants.KEY_LENGTH
    marker_unit: int = CipherConstants.MARKER_UNIT


@dataclass
class ProcessingSettings:
    """Capture processing settings"""
    output_format: str = "pcapng"  # used when the output path has no known suffix
    pass_through_unmatched: bool = True
    progress_interval: int = ProcessingConstants.DEFAULT_PROGRESS_INTERVAL


@dataclass
class LoggingSettings:
    """Logging settings"""
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_to_file: bool = True
    log_file_max_size: int = FileConstants.LOG_MAX_SIZE
    log_backup_count: int = FileConstants.LOG_BACKUP_COUNT
    trace_records: bool = False  # log every matched record at DEBUG


@dataclass
class AppConfig:
    """Application configuration

    Supports load, save and validation. A missing or unreadable file yields
    the defaults.
    """
    cipher: CipherSettings = field(default_factory=CipherSettings)
    processing: ProcessingSettings = field(default_factory=ProcessingSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    # Metadata
    config_version: str = "1.0"
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def __post_init__(self):
        if self.created_at is None:
            self.created_at = datetime.now().isoformat()
        self.updated_at = datetime.now().isoformat()

    @classmethod
    def load(cls, config_path: Optional[Union[str, Path]] = None) -> 'AppConfig':
        """Load a configuration file"""
        if config_path is None:
            config_path = cls.get_default_config_path()

        config_path = Path(config_path)

        if not config_path.exists():
            return cls.default()

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if config_path.suffix.lower() == '.json':
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)

            data = data or {}
            cipher_data = data.get('cipher', {})
            processing_data = data.get('processing', {})
            logging_data = data.get('logging', {})

            return cls(
                cipher=CipherSettings(**cipher_data) if cipher_data else CipherSettings(),
                processing=ProcessingSettings(**processing_data) if processing_data else ProcessingSettings(),
                logging=LoggingSettings(**logging_data) if logging_data else LoggingSettings(),
                config_version=data.get('config_version', '1.0'),
                created_at=data.get('created_at'),
                updated_at=data.get('updated_at')
            )

        except Exception as e:
            logger.warning(f"Failed to load configuration from {config_path}: {e}, using defaults")
            return cls.default()

    def save(self, config_path: Optional[Union[str, Path]] = None) -> bool:
        """Save the configuration file"""
        if config_path is None:
            config_path = self.get_default_config_path()

        config_path = Path(config_path)

        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            self.updated_at = datetime.now().isoformat()
            data = asdict(self)

            with open(config_path, 'w', encoding='utf-8') as f:
                if config_path.suffix.lower() == '.json':
                    json.dump(data, f, indent=2, ensure_ascii=False)
                else:
                    yaml.dump(data, f, default_flow_style=False,
                              allow_unicode=True, indent=2)

            return True

        except Exception as e:
            logger.error(f"Failed to save configuration to {config_path}: {e}")
            return False

    @classmethod
    def default(cls) -> 'AppConfig':
        return cls()

    @staticmethod
    def get_default_config_path() -> Path:
        return Path.home() / FileConstants.CONFIG_DIR_NAME / FileConstants.DEFAULT_CONFIG_FILE

    def validate(self) -> tuple[bool, list]:
        """Validate the configuration

        Returns:
            tuple: (is_valid, messages)
        """
        errors = []

        if self.cipher.schedule_rounds < 1:
            errors.append("schedule_rounds must be at least 1")

        if self.cipher.key_length != CipherConstants.KEY_LENGTH:
            errors.append(
                f"key_length must be {CipherConstants.KEY_LENGTH} (got {self.cipher.key_length})"
            )

        if self.cipher.marker_unit < 1:
            errors.append("marker_unit must be greater than 0")

        if self.processing.output_format not in ValidationConstants.VALID_OUTPUT_FORMATS:
            errors.append(f"Invalid output format: {self.processing.output_format}")

        if self.processing.progress_interval <= 0:
            errors.append("progress_interval must be greater than 0")

        if self.logging.log_level.upper() not in ValidationConstants.VALID_LOG_LEVELS:
            errors.append(f"Invalid log level: {self.logging.log_level}")

        if self.logging.log_file_max_size <= 0:
            errors.append("log_file_max_size must be greater than 0")

        return len(errors) == 0, errors


# Global configuration instance
_app_config: Optional[AppConfig] = None


def get_app_config() -> AppConfig:
    """Return the global configuration, loading it on first use"""
    global _app_config
    if _app_config is None:
        _app_config = AppConfig.load()
    return _app_config


def reload_app_config():
    global _app_config
    _app_config = AppConfig.load()

