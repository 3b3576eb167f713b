"""Export of projects to a static HTML report."""

from strategysuite.export._report import (
    REPORT_MEDIA_TYPE,
    ExportedReport,
    render_report,
    report_filename,
)

__all__ = ["REPORT_MEDIA_TYPE", "ExportedReport", "render_report", "report_filename"]
