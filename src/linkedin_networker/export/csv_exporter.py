# ABOUTME: CSV exporter for a crawl session's company-connection results.
# ABOUTME: Exports joined rows to CSV format with a metadata header and proper escaping.

import csv
from datetime import UTC, datetime
from pathlib import Path

from linkedin_networker.models import CompanyConnectionResult


class CSVExporter:
    """Exports company-connection results to CSV format."""

    HEADERS = [
        "company",
        "company_url",
        "company_description",
        "connection",
        "headline",
        "profile_url",
        "connection_source",
        "degree",
        "connection_path",
        "found_at",
    ]

    def export(
        self,
        results: list[CompanyConnectionResult],
        output_path: Path,
        session_id: str | None = None,
    ) -> Path:
        """Export results to a CSV file.

        Args:
            results: Joined rows to export.
            output_path: Path to the output CSV file.
            session_id: Optional session ID to include in metadata.

        Returns:
            Path to the created CSV file.
        """
        with open(output_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)

            writer.writerow(self._create_metadata_row(len(results), session_id))
            writer.writerow(self.HEADERS)

            for result in results:
                writer.writerow(self._result_to_row(result))

        return output_path

    def _create_metadata_row(self, count: int, session_id: str | None) -> list[str]:
        """Create a metadata row with export information.

        Args:
            count: Number of rows being exported.
            session_id: Optional session ID to include.

        Returns:
            List of strings for the metadata row.
        """
        timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
        metadata_parts = [f"# Exported at: {timestamp}", f"Records: {count}"]

        if session_id:
            metadata_parts.append(f"Session: {session_id}")

        # Single cell so spreadsheet tools do not split it.
        return [" | ".join(metadata_parts)]

    def _result_to_row(self, result: CompanyConnectionResult) -> list[str]:
        return [
            result.company_name,
            result.company_linkedin_url,
            result.company_description or "",
            result.connection_name,
            result.connection_headline or "",
            result.connection_profile_url or "",
            result.connection_source or "",
            str(result.connection_degree),
            result.connection_path,
            result.created_at.strftime("%Y-%m-%d %H:%M:%S") if result.created_at else "",
        ]
