#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
CLI Commands

- process: rewrite the UDP payloads of one flow in a capture
- validate: check an input capture path without processing it
- config: show the effective configuration or write the default file
"""

from pathlib import Path
from typing import Optional

import typer

from ..common.constants import CipherConstants, ProcessingConstants, ValidationConstants
from ..common.exceptions import ConfigurationError, ValidationError, format_error_for_user
from ..config import AppConfig, get_app_config, reload_app_config
from ..core.key_material import derive_key, parse_port_spec
from ..core.messages import StandardMessages
from ..core.processors import CrypterConfig, PayloadCrypter
from ..infrastructure.logging import get_logger, reconfigure_logging
from .formatters import format_configuration_display, format_result, format_validation_result

logger = get_logger("cli")


def validate_input_path(input_path: Path) -> Path:
    """Raise if ``input_path`` is not an existing pcap/pcapng file"""
    if not input_path.exists():
        raise FileNotFoundError(f"{StandardMessages.INPUT_NOT_FOUND}: {input_path}")
    if not input_path.is_file():
        raise ValidationError(f"Input path is not a file: {input_path}", field_name="input_path")
    if input_path.suffix.lower() not in ProcessingConstants.SUPPORTED_EXTENSIONS:
        raise ValidationError(
            f"{StandardMessages.INVALID_FILE_TYPE} (got: {input_path.suffix})",
            field_name="input_path",
        )
    if input_path.stat().st_size < ValidationConstants.MIN_FILE_SIZE:
        raise ValidationError(f"File too small to be a capture: {input_path}", field_name="input_path")
    return input_path


def _load_config(config_file: Optional[Path]) -> AppConfig:
    if config_file is None:
        config = get_app_config()
    else:
        config = AppConfig.load(config_file)
        reconfigure_logging(config)

    is_valid, messages = config.validate()
    if not is_valid:
        raise ConfigurationError(f"{StandardMessages.CONFIGURATION_ERROR}: {'; '.join(messages)}")
    return config


def build_crypter_config(
    config: AppConfig,
    secret: str,
    port: str,
    invert: bool = False,
    rounds: Optional[int] = None,
    drop_unmatched: bool = False,
) -> CrypterConfig:
    """Turn CLI arguments and settings into a validated CrypterConfig

    Raises:
        ConfigurationError: On bad port, secret, key length or schedule rounds
    """
    if config.cipher.key_length != CipherConstants.KEY_LENGTH:
        raise ConfigurationError(
            f"key_length must be {CipherConstants.KEY_LENGTH} (got {config.cipher.key_length})",
            config_key="key_length",
        )

    target_port, port_invert = parse_port_spec(port)
    inverted_key = invert or port_invert
    key = derive_key(secret, invert=inverted_key)

    schedule_rounds = config.cipher.schedule_rounds if rounds is None else rounds
    if schedule_rounds < 1:
        raise ConfigurationError(
            f"schedule_rounds must be at least 1 (got {schedule_rounds})", config_key="schedule_rounds"
        )

    return CrypterConfig(
        name="payload_crypter",
        key=key,
        inverted_key=inverted_key,
        target_port=target_port,
        schedule_rounds=schedule_rounds,
        marker_unit=config.cipher.marker_unit,
        pass_through_unmatched=config.processing.pass_through_unmatched and not drop_unmatched,
        output_format=config.processing.output_format,
        progress_interval=config.processing.progress_interval,
        trace_records=config.logging.trace_records,
    )


def process_command(
    input_path: Path = typer.Argument(..., help="Input PCAP/PCAPNG capture"),
    output_path: Path = typer.Argument(..., help="Output capture (.pcapng or .pcap)"),
    secret: str = typer.Argument(..., help="Shared secret, the first 16 bytes are used"),
    port: str = typer.Argument(..., help="Target UDP port, 'int:<port>' selects the inverted key"),
    invert: bool = typer.Option(False, "--invert", help="Complement every key byte"),
    rounds: Optional[int] = typer.Option(None, "--rounds", help="Key-scheduling passes (default from config)"),
    drop_unmatched: bool = typer.Option(
        False, "--drop-unmatched", help="Leave records outside the flow out of the output"
    ),
    config_file: Optional[Path] = typer.Option(None, "--config", help="Configuration file (YAML or JSON)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
):
    """Decrypt or re-encrypt the UDP payloads of one flow in a capture"""

    try:
        validate_input_path(input_path)
        config = _load_config(config_file)
        crypter_config = build_crypter_config(config, secret, port, invert, rounds, drop_unmatched)
    except (FileNotFoundError, ValidationError, ConfigurationError) as e:
        message = format_error_for_user(e) if isinstance(e, (ValidationError, ConfigurationError)) else str(e)
        typer.echo(f"{StandardMessages.ERROR_ICON} {message}", err=True)
        raise typer.Exit(1)

    if verbose:
        typer.echo(f"📁 Input: {input_path}")
        typer.echo(f"📁 Output: {output_path}")
        typer.echo(
            f"⚙️ Port: {crypter_config.target_port}, rounds: {crypter_config.schedule_rounds}, "
            f"inverted key: {crypter_config.inverted_key}"
        )

    crypter = PayloadCrypter(crypter_config)
    if not crypter.initialize():
        typer.echo(
            StandardMessages.format_error_with_context(
                StandardMessages.CONFIGURATION_ERROR, crypter.initialization_error
            ),
            err=True,
        )
        raise typer.Exit(1)

    if verbose:
        typer.echo(f"{StandardMessages.PROCESSING_ICON} {crypter.get_description()}")
    typer.echo(f"{StandardMessages.START_ICON} {StandardMessages.PROCESSING_START}")
    result = crypter.process_file(input_path, output_path)
    format_result(result, verbose)

    if not result.success:
        raise typer.Exit(1)
    typer.echo(f"{StandardMessages.SUCCESS_ICON} {StandardMessages.PROCESSING_COMPLETE}")


def validate_command(
    input_path: Path = typer.Argument(..., help="Input PCAP/PCAPNG capture to validate"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
):
    """Validate an input capture without processing it"""

    typer.echo(f"{StandardMessages.INFO_ICON} Validating input: {input_path}")

    try:
        validate_input_path(input_path)
    except FileNotFoundError as e:
        typer.echo(f"{StandardMessages.ERROR_ICON} {e}", err=True)
        raise typer.Exit(1)
    except ValidationError as e:
        typer.echo(f"{StandardMessages.ERROR_ICON} {e.message}", err=True)
        raise typer.Exit(1)

    format_validation_result(input_path, verbose)


def config_command(
    config_file: Optional[Path] = typer.Option(None, "--config", help="Configuration file (YAML or JSON)"),
    init: bool = typer.Option(False, "--init", help="Write the default configuration file if none exists"),
):
    """Display the effective configuration"""

    if init:
        target = config_file or AppConfig.get_default_config_path()
        if target.exists():
            typer.echo(f"{StandardMessages.INFO_ICON} Configuration file already exists: {target}")
        elif AppConfig.default().save(target):
            typer.echo(f"{StandardMessages.SUCCESS_ICON} Wrote default configuration: {target}")
            if config_file is None:
                reload_app_config()
        else:
            typer.echo(f"{StandardMessages.ERROR_ICON} Failed to write configuration: {target}", err=True)
            raise typer.Exit(1)

    config = AppConfig.load(config_file) if config_file else get_app_config()
    is_valid, messages = config.validate()
    format_configuration_display(config, messages)

    if not is_valid:
        typer.echo(f"{StandardMessages.ERROR_ICON} {StandardMessages.CONFIGURATION_ERROR}", err=True)
        raise typer.Exit(1)
