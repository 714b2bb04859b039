"""
Report generator for red tag analytics.

Orchestrates snapshotting the record store, aggregation, formatting, and
the flat-file export.
"""

from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from metrics.config import config
from records.store import RecordStore

from .aggregator import AnalysisResult, DataAggregator
from .exporter import export_csv, export_filename
from .formatters import HTMLFormatter, JSONFormatter, MarkdownFormatter, build_dashboard

FORMATS = ("markdown", "json", "html")

Now = Union[datetime, date, None]


class ReportGenerator:
    """Main report generator class."""

    def __init__(
        self,
        store: Optional[RecordStore] = None,
        records_path: Optional[Path] = None,
    ):
        """
        Initialize report generator.

        Args:
            store: Record store to report on. If None, loads records_path.
            records_path: Records log to load. If None, uses the configured path.
        """
        if store is None:
            if records_path is None:
                records_path = config.get_path('records.log_path')
            store = RecordStore.load(records_path, missing_ok=True)

        self.store = store
        self.window_days = config.get('analysis.recent_window_days', 30)
        self.aggregator = DataAggregator(
            top_n=config.get('analysis.top_n', 5),
            window_days=self.window_days,
            threshold=config.get('analysis.increasing_threshold', 0.6),
        )

    def analyze(self, now: Now = None) -> AnalysisResult:
        """Analyze a fresh snapshot of the store."""
        return self.aggregator.analyze(self.store.snapshot(), now=now)

    def get_raw_data(self, now: Now = None) -> Dict[str, Any]:
        """
        Get raw aggregated data without formatting.

        Args:
            now: Evaluation time for the trend

        Returns:
            Dictionary with ranked lists and trend
        """
        return self.analyze(now).to_dict()

    def get_dashboard(self, now: Now = None, include_reasons: Optional[bool] = None) -> Dict[str, Any]:
        """
        Get display rows for the four dashboard sections.

        Args:
            now: Evaluation time for the trend
            include_reasons: Also rank removal reasons (default from config)

        Returns:
            Dashboard dictionary
        """
        if include_reasons is None:
            include_reasons = config.get('reporting.include_reasons', False)
        return build_dashboard(
            self.analyze(now),
            window_days=self.window_days,
            include_reasons=include_reasons,
        )

    def generate_report(
        self,
        format: str = "markdown",
        output_path: Optional[Path] = None,
        now: Now = None,
        include_reasons: Optional[bool] = None,
    ) -> str:
        """
        Generate the analytics report.

        Args:
            format: Output format ("markdown", "json", "html")
            output_path: Optional path to write report to
            now: Evaluation time for the trend
            include_reasons: Also rank removal reasons (default from config)

        Returns:
            Formatted report as string
        """
        if format not in FORMATS:
            raise ValueError(f"Unknown report format {format!r}; expected one of {', '.join(FORMATS)}")

        dashboard = self.get_dashboard(now=now, include_reasons=include_reasons)

        if format == "json":
            report = JSONFormatter.format(dashboard, generated_at=dashboard["generated_at"])
        elif format == "html":
            report = HTMLFormatter.format(dashboard)
        else:
            report = MarkdownFormatter.format(dashboard)

        # Write to file if specified
        if output_path:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(report)

        return report

    def export(self, now: Now = None) -> Tuple[str, bytes]:
        """
        Export all records as delimited text.

        Args:
            now: Generation time used in the file name

        Returns:
            Tuple of (suggested file name, file content)
        """
        filename = export_filename(now, prefix=config.get('export.filename_prefix'))
        return filename, export_csv(self.store.snapshot())

    def export_csv_file(self, output_dir: Optional[Path] = None, now: Now = None) -> Path:
        """
        Write the export to a directory.

        Args:
            output_dir: Target directory (default from config)
            now: Generation time used in the file name

        Returns:
            Path of the written file
        """
        if output_dir is None:
            output_dir = config.get_path('export.output_dir')
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        filename, content = self.export(now)
        path = output_dir / filename
        path.write_bytes(content)
        return path
