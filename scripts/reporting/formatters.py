"""
Output formatters for red tag analytics.

Turns analysis results into display rows (name, count, emphasis) that any
front end can render, and renders those rows as Markdown, HTML or JSON.
Markdown and HTML output come from the Jinja2 templates in ``templates/``.
"""

import json
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .aggregator import AnalysisResult, RankedItem
from .trends import DEFAULT_WINDOW_DAYS, TrendResult


NO_DATA_LABEL = "No data available"

TEMPLATES_DIR = Path(__file__).parent / "templates"


@dataclass(frozen=True)
class DisplayRow:
    """One rendered entry of a ranked list."""
    name: str
    count: int
    emphasized: bool = False
    is_placeholder: bool = False

    @property
    def label(self) -> str:
        return f"{self.count} occurrences"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "count": self.count,
            "label": self.label,
            "emphasized": self.emphasized,
            "placeholder": self.is_placeholder,
        }


PLACEHOLDER_ROW = DisplayRow(NO_DATA_LABEL, 0, is_placeholder=True)


def format_top_items(items: Sequence[RankedItem]) -> List[DisplayRow]:
    """
    Build display rows for a ranked list.

    Only the row at index 0 is emphasized, even when later rows tie with it.
    An empty list, or one led by a zero count, renders as a single
    placeholder row.

    Args:
        items: Ranked items, highest count first

    Returns:
        List of DisplayRow
    """
    if not items or items[0].count == 0:
        return [PLACEHOLDER_ROW]

    return [
        DisplayRow(item.name, item.count, emphasized=(index == 0))
        for index, item in enumerate(items)
    ]


def format_mfc_stats(items: Sequence[RankedItem]) -> List[DisplayRow]:
    """Display rows for the full MFC ranking, without truncation."""
    return format_top_items(items)


def format_trends(trend: TrendResult, window_days: int = DEFAULT_WINDOW_DAYS) -> Dict[str, Any]:
    """
    Build the display block for a trend result.

    Args:
        trend: Trend classification
        window_days: Recency window the trend was computed over

    Returns:
        Dictionary with label, counts, detail text and display flags
    """
    if trend.is_insufficient:
        detail = NO_DATA_LABEL
    else:
        detail = (
            f"{trend.recent_count} of {trend.total_count} removals "
            f"in the last {window_days} days"
        )

    return {
        "trend": trend.trend,
        "recent_count": trend.recent_count,
        "total_count": trend.total_count,
        "detail": detail,
        "emphasized": trend.is_increasing,
        "placeholder": trend.is_insufficient,
    }


def build_dashboard(
    analysis: AnalysisResult,
    window_days: int = DEFAULT_WINDOW_DAYS,
    include_reasons: bool = False,
) -> Dict[str, Any]:
    """
    Build the four dashboard result streams from an analysis.

    Args:
        analysis: Aggregated analysis result
        window_days: Recency window used for the trend
        include_reasons: Also include the removal reason ranking

    Returns:
        Dictionary of display-ready sections
    """
    dashboard = {
        "generated_at": analysis.generated_at,
        "record_count": analysis.record_count,
        "top_parts": [row.to_dict() for row in format_top_items(analysis.top_parts)],
        "top_assets": [row.to_dict() for row in format_top_items(analysis.top_assets)],
        "mfc_stats": [row.to_dict() for row in format_mfc_stats(analysis.mfc_stats)],
        "trends": format_trends(analysis.trends, window_days=window_days),
    }
    if include_reasons:
        dashboard["top_reasons"] = [row.to_dict() for row in format_top_items(analysis.top_reasons)]
    return dashboard


class ASCIIChart:
    """Simple ASCII chart generator."""

    @staticmethod
    def bar_chart(data: Dict[str, float], max_width: int = 40) -> str:
        """
        Generate horizontal bar chart.

        Args:
            data: Dictionary of label -> value
            max_width: Maximum bar width in characters

        Returns:
            ASCII bar chart as string
        """
        if not data:
            return "No data"

        max_value = max(data.values())
        lines = []

        # sorted() is stable, so equal values keep their input order
        for label, value in sorted(data.items(), key=lambda x: x[1], reverse=True):
            bar_width = int((value / max_value) * max_width) if max_value > 0 else 0
            bar = "█" * bar_width
            lines.append(f"{label:20s} {bar} {value}")

        return "\n".join(lines)


@lru_cache(maxsize=None)
def _environment(templates_dir: Path = TEMPLATES_DIR) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(enabled_extensions=("html", "html.jinja2")),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def _render(template_name: str, dashboard: Dict[str, Any], **extra: Any) -> str:
    template = _environment().get_template(template_name)
    return template.render(**dashboard, **extra)


def _chart_data(rows: List[Dict[str, Any]]) -> Dict[str, int]:
    return {row["name"]: row["count"] for row in rows if not row["placeholder"]}


class MarkdownFormatter:
    """Format a dashboard as Markdown."""

    @staticmethod
    def format(dashboard: Dict[str, Any], include_charts: bool = True) -> str:
        """
        Format dashboard data as Markdown.

        Args:
            dashboard: Output of build_dashboard()
            include_charts: Add an ASCII bar chart of the MFC breakdown

        Returns:
            Markdown formatted report
        """
        mfc_chart = None
        if include_charts:
            data = _chart_data(dashboard["mfc_stats"])
            mfc_chart = ASCIIChart.bar_chart(data) if data else None
        return _render("dashboard.md.jinja2", dashboard, mfc_chart=mfc_chart)


class HTMLFormatter:
    """Format a dashboard as HTML."""

    @staticmethod
    def format(dashboard: Dict[str, Any]) -> str:
        """
        Format dashboard data as HTML.

        Args:
            dashboard: Output of build_dashboard()

        Returns:
            HTML formatted report
        """
        return _render("dashboard.html.jinja2", dashboard)


class JSONFormatter:
    """Format report data as JSON."""

    @staticmethod
    def format(data: Dict[str, Any], generated_at: Optional[str] = None) -> str:
        """
        Format report data as JSON.

        Args:
            data: Dashboard or analysis dictionary
            generated_at: Generation timestamp (defaults to now)

        Returns:
            JSON formatted report
        """
        output = {
            "generated_at": generated_at or datetime.now().isoformat(),
            "report_data": data,
        }

        return json.dumps(output, indent=2, ensure_ascii=False, default=str)
