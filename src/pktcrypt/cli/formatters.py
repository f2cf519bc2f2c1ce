#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
CLI Result Formatters

Display helpers for rewrite results, validation results and the effective
configuration.
"""

from pathlib import Path
from typing import List

import typer

from ..config import AppConfig
from ..core.messages import MessageFormatter, StandardMessages
from ..core.models import ProcessResult


def format_result(result: ProcessResult, verbose: bool = False):
    """Format and display a rewrite result

    Args:
        result: ProcessResult from the payload crypter
        verbose: Whether to show detailed statistics
    """
    typer.echo(StandardMessages.format_result_summary(result))

    if verbose and result.success:
        typer.echo("\n📊 Processing Statistics:")
        for line in StandardMessages.format_stats_lines(result):
            typer.echo(f"  {line}")
        if result.stats.short_payloads:
            typer.echo(
                f"  {StandardMessages.WARNING_ICON} {result.stats.short_payloads} matched payloads "
                f"were shorter than the position marker and left unchanged"
            )


def format_validation_result(input_path: Path, verbose: bool = False):
    """Display the outcome of a successful input validation"""
    typer.echo(f"{StandardMessages.SUCCESS_ICON} Valid capture file: {input_path.name}")
    if verbose:
        file_size = input_path.stat().st_size
        typer.echo(f"📊 File size: {MessageFormatter.format_file_size(file_size)}")


def format_configuration_display(config: AppConfig, messages: List[str]) -> None:
    """Display the effective configuration and any validation messages"""
    typer.echo("⚙️ Cipher:")
    typer.echo(f"  schedule_rounds: {config.cipher.schedule_rounds}")
    typer.echo(f"  key_length: {config.cipher.key_length}")
    typer.echo(f"  marker_unit: {config.cipher.marker_unit}")
    typer.echo("⚙️ Processing:")
    typer.echo(f"  output_format: {config.processing.output_format}")
    typer.echo(f"  pass_through_unmatched: {config.processing.pass_through_unmatched}")
    typer.echo(f"  progress_interval: {config.processing.progress_interval}")
    typer.echo("⚙️ Logging:")
    typer.echo(f"  log_level: {config.logging.log_level}")
    typer.echo(f"  log_to_file: {config.logging.log_to_file}")

    for message in messages:
        typer.echo(f"{StandardMessages.WARNING_ICON} {message}")
