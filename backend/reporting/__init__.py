"""Reporting utilities for dashboard views and documents."""

from backend.reporting.dashboard import build_daily_series, summarize_transactions
from backend.reporting.dashboard_report import (
    DashboardReportData,
    format_currency,
    generate_dashboard_report_pdf,
)

__all__ = [
    "DashboardReportData",
    "build_daily_series",
    "format_currency",
    "generate_dashboard_report_pdf",
    "summarize_transactions",
]
