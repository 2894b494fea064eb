"""Scan orchestration."""

from .orchestrator import NewsFetcher, ScanContext, SourceNotFoundError, print_scan_summary

__all__ = ["NewsFetcher", "ScanContext", "SourceNotFoundError", "print_scan_summary"]
