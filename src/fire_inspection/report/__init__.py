"""Report export modules."""

from .exporter import summarize_inspection, export_summary_json, export_defects_csv, save_report_markdown

__all__ = [
    "summarize_inspection",
    "export_summary_json",
    "export_defects_csv",
    "save_report_markdown",
]
