"""
Red tag analytics reporting system.

Provides aggregation, trend classification, formatting, flat-file export
and report generation for red tag records.
"""

from .aggregator import (
    DataAggregator,
    AnalysisResult,
    RankedItem,
    MISSING_KEY,
    NO_DATA_NAME,
    compute_frequencies,
    top_n,
    analyze,
)
from .trends import TrendResult, classify_trend, parse_record_date, parse_record_instant
from .formatters import (
    DisplayRow,
    MarkdownFormatter,
    JSONFormatter,
    HTMLFormatter,
    ASCIIChart,
    build_dashboard,
    format_top_items,
    format_mfc_stats,
    format_trends,
)
from .exporter import HEADERS, export_csv, export_csv_text, export_filename
from .notifications import build_slack_message, send_slack_message
from .generator import ReportGenerator

__all__ = [
    'DataAggregator',
    'AnalysisResult',
    'RankedItem',
    'MISSING_KEY',
    'NO_DATA_NAME',
    'compute_frequencies',
    'top_n',
    'analyze',
    'TrendResult',
    'classify_trend',
    'parse_record_date',
    'parse_record_instant',
    'DisplayRow',
    'MarkdownFormatter',
    'JSONFormatter',
    'HTMLFormatter',
    'ASCIIChart',
    'build_dashboard',
    'format_top_items',
    'format_mfc_stats',
    'format_trends',
    'HEADERS',
    'export_csv',
    'export_csv_text',
    'export_filename',
    'build_slack_message',
    'send_slack_message',
    'ReportGenerator',
]
