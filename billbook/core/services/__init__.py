"""
Core business logic services.

Layer-pure services that depend only on:
- billbook/core/entities/*
- billbook/core/exceptions.py

NO infrastructure imports.
"""

from billbook.core.services.line_items import (
    RequestedLineItem,
    build_items,
    parse_quantity,
    checked_total,
    parse_rate,
    validate_line,
)
from billbook.core.services.report_calculator import (
    DashboardSummary,
    GstReport,
    ProductSales,
    ProfitLossReport,
    ReportCalculator,
    SalesReport,
    StockSummary,
    month_start,
)

__all__ = [
    # Line items
    "RequestedLineItem",
    "build_items",
    "checked_total",
    "parse_quantity",
    "parse_rate",
    "validate_line",
    # Reports
    "ReportCalculator",
    "SalesReport",
    "ProfitLossReport",
    "GstReport",
    "DashboardSummary",
    "StockSummary",
    "ProductSales",
    "month_start",
]
