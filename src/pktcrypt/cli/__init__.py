#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
PktCrypt command line interface
"""

import typer

from ..infrastructure.logging import get_logger as _ensure_logger
from ..infrastructure.logging import apply_env_log_level
from .commands import config_command, process_command, validate_command

app = typer.Typer(
    help="PktCrypt - decrypt RC4-protected UDP payloads in PCAP/PCAPNG captures",
    add_completion=False,
)

_ensure_logger()

# PKTCRYPT_LOG_LEVEL overrides the console log level at runtime
# Example: PKTCRYPT_LOG_LEVEL=DEBUG pktcrypt process in.pcapng out.pcapng <secret> 5000
env_log_level = apply_env_log_level()
if env_log_level is not None:
    _ensure_logger("cli").debug(f"Log level set to {env_log_level.name} via PKTCRYPT_LOG_LEVEL environment variable")

app.command("process", help="Decrypt or re-encrypt the UDP payloads of one flow")(process_command)
app.command("validate", help="Validate a PCAP/PCAPNG capture without processing")(validate_command)
app.command("config", help="Display the effective configuration")(config_command)

__all__ = [
    "app",
    "process_command",
    "validate_command",
    "config_command",
]
