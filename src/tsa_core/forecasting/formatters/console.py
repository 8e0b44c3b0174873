"""Console output formatting utilities."""

from __future__ import annotations

import math
import re

import pandas as pd

from tsa_core.forecasting.api import AnalysisReport


def sanitize_for_console(text: str) -> str:
    """Remove non-ASCII characters so output survives narrow console encodings.

    Series names come from file names and CSV contents, which may contain
    characters a cp1252 console cannot encode.
    """
    return re.sub(r"[^\x00-\x7F]+", "", text)


def _format_metric(value: float) -> str:
    return "n/a" if math.isnan(value) else f"{value:,.4f}"


def format_report_for_console(report: AnalysisReport) -> str:
    """Build a human-readable summary of an analysis run.

    Args:
        report: AnalysisReport from run_analysis()

    Returns:
        Text listing each series with the RMSE, MAE and R2 of every forecast,
        followed by the failures of the run
    """
    if not report.analyses and not report.failures:
        return "No series analysed."

    lines = []
    horizon = report.metadata.get("horizon")
    lines.append(f"Forecast Accuracy - Horizon {horizon}")
    lines.append("=" * 60)
    lines.append("")

    for analysis in report.analyses:
        series = analysis.series
        lines.append(f"{series.name} [{series.group}]:")
        lines.append(
            f"  {len(analysis.historical)} historical, {len(analysis.actual)} actual points"
        )

        if not analysis.forecasts:
            lines.append("  No successful forecasts")

        for details in analysis.forecasts:
            metrics = details.metrics
            lines.append(
                f"  {details.algorithm_name}: "
                f"RMSE {_format_metric(metrics.rmse)}, "
                f"MAE {_format_metric(metrics.mae)}, "
                f"R2 {_format_metric(metrics.r2)}"
            )

        lines.append("")

    if report.failures:
        lines.append(f"Failures ({len(report.failures)}):")
        lines.append("-" * 60)
        for failure in report.failures:
            target = failure.series_name
            if failure.algorithm_name is not None:
                target = f"{target} - {failure.algorithm_name}"
            lines.append(f"{target}: {failure.error_type}: {failure.message}")
        lines.append("")

    return sanitize_for_console("\n".join(lines))


def format_histograms_for_console(histograms: pd.DataFrame) -> str:
    """Render RMSE histogram counts (from reporting.build_rmse_histograms) as text."""
    if histograms.empty:
        return "No RMSE values to bin."

    lines = []
    for (group, algorithm), df in histograms.groupby(["group", "algorithm"], sort=True):
        lines.append(f"{group} RMSE - {algorithm}:")
        for _, row in df.iterrows():
            bar = "#" * int(row["count"])
            lines.append(f"  {row['bin_start']:>8.0f} - {row['bin_end']:<8.0f} {bar} ({row['count']})")
        lines.append("")

    return sanitize_for_console("\n".join(lines))
