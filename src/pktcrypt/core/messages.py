#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Standard Messages - user-facing CLI text

Keeps error messages, progress lines and result summaries in one place so
every command reports in the same format.
"""

from typing import List, Optional

from .models import ProcessResult


class StandardMessages:
    """Standardized CLI messages"""

    # =========================================================================
    # Error Messages
    # =========================================================================
    INVALID_FILE_TYPE = "Input file must be a PCAP or PCAPNG file"
    INPUT_NOT_FOUND = "Input path does not exist"
    CONFIGURATION_ERROR = "Configuration validation failed"

    # =========================================================================
    # Progress Messages
    # =========================================================================
    PROCESSING_START = "Processing started..."
    PROCESSING_COMPLETE = "Processing completed successfully"
    PROCESSING_FAILED = "Processing failed"

    # =========================================================================
    # Status Indicators
    # =========================================================================
    SUCCESS_ICON = "✅"
    ERROR_ICON = "❌"
    WARNING_ICON = "⚠️"
    INFO_ICON = "ℹ️"
    PROCESSING_ICON = "⚙️"
    START_ICON = "🚀"

    # =========================================================================
    # Statistics Messages
    # =========================================================================
    STATS_RECORDS_READ = "Records read: {count:,}"
    STATS_RECORDS_WRITTEN = "Records written: {count:,}"
    STATS_OUTBOUND = "Outbound payloads: {count:,}"
    STATS_INBOUND = "Inbound payloads: {count:,}"
    STATS_PASSED_THROUGH = "Passed through: {count:,}"
    STATS_DROPPED = "Dropped: {count:,}"
    STATS_SHORT = "Payloads without marker: {count:,}"
    STATS_RESYNC = "Keystream steps skipped: {count:,}"
    STATS_BYTES = "Bytes transformed: {count:,}"

    @staticmethod
    def format_result_summary(result: ProcessResult) -> str:
        """One-line summary of a rewrite result"""
        if result.success:
            duration = MessageFormatter.format_duration(result.duration_ms)
            transformed = result.stats.payloads_transformed
            return (
                f"{StandardMessages.SUCCESS_ICON} Transformed {transformed:,} payloads "
                f"in {result.stats.records_read:,} records ({duration})"
            )
        errors = "; ".join(result.errors)
        return f"{StandardMessages.ERROR_ICON} {StandardMessages.PROCESSING_FAILED}: {errors}"

    @staticmethod
    def format_stats_lines(result: ProcessResult) -> List[str]:
        stats = result.stats
        return [
            StandardMessages.STATS_RECORDS_READ.format(count=stats.records_read),
            StandardMessages.STATS_RECORDS_WRITTEN.format(count=stats.records_written),
            StandardMessages.STATS_OUTBOUND.format(count=stats.outbound_payloads),
            StandardMessages.STATS_INBOUND.format(count=stats.inbound_payloads),
            StandardMessages.STATS_PASSED_THROUGH.format(count=stats.passed_through),
            StandardMessages.STATS_DROPPED.format(count=stats.dropped),
            StandardMessages.STATS_SHORT.format(count=stats.short_payloads),
            StandardMessages.STATS_RESYNC.format(count=stats.resync_steps),
            StandardMessages.STATS_BYTES.format(count=stats.bytes_transformed),
        ]

    @staticmethod
    def format_error_with_context(error_message: str, context: Optional[str] = None) -> str:
        if context:
            return f"{StandardMessages.ERROR_ICON} {error_message} (Context: {context})"
        return f"{StandardMessages.ERROR_ICON} {error_message}"


class MessageFormatter:
    """Helper class for value formatting"""

    @staticmethod
    def format_duration(duration_ms: float) -> str:
        """Format duration in human-readable format

        Args:
            duration_ms: Duration in milliseconds

        Returns:
            Formatted duration string
        """
        if duration_ms < 1000:
            return f"{duration_ms:.0f}ms"
        elif duration_ms < 60000:
            return f"{duration_ms/1000:.1f}s"
        else:
            minutes = int(duration_ms // 60000)
            seconds = (duration_ms % 60000) / 1000
            return f"{minutes}m {seconds:.1f}s"

    @staticmethod
    def format_file_size(size_bytes: int) -> str:
        for unit in ['B', 'KB', 'MB', 'GB']:
            if size_bytes < 1024.0:
                return f"{size_bytes:.1f} {unit}"
            size_bytes /= 1024.0
        return f"{size_bytes:.1f} TB"
