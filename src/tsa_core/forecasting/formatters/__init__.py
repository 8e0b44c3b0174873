"""Output formatting utilities."""

from tsa_core.forecasting.formatters.console import (
    format_histograms_for_console,
    format_report_for_console,
    sanitize_for_console,
)

__all__ = ["format_histograms_for_console", "format_report_for_console", "sanitize_for_console"]
