"""Level analysis: per-level and batch metrics, and text reports."""

from mission_gen.analysis.metrics import (
    compute_batch_metrics,
    compute_level_metrics,
    count_loop_doors,
    summarize,
)
from mission_gen.analysis.models import BatchMetrics, LevelMetrics, StatSummary
from mission_gen.analysis.report import generate_batch_report, generate_level_report

__all__ = [
    # metrics
    "compute_batch_metrics",
    "compute_level_metrics",
    "count_loop_doors",
    "summarize",
    # models
    "BatchMetrics",
    "LevelMetrics",
    "StatSummary",
    # report
    "generate_batch_report",
    "generate_level_report",
]
