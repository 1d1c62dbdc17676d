"""Output module - resilience reports, JSON and CSV export."""

from .export import export_csv, export_json, link_rows
from .reports import ReportGenerator, generate_report, resilience_status

__all__ = [
    "generate_report",
    "ReportGenerator",
    "resilience_status",
    "export_json",
    "export_csv",
    "link_rows",
]
