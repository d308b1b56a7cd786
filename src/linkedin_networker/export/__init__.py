# ABOUTME: Export module for writing crawl results to files.
# ABOUTME: Provides CSV export functionality with metadata and proper formatting.

from linkedin_networker.export.csv_exporter import CSVExporter

__all__ = ["CSVExporter"]
