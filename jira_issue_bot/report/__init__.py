"""Periodic P0/P1 digest report."""

from .aggregator import ReportBuckets, build_report

__all__ = ["ReportBuckets", "build_report"]
