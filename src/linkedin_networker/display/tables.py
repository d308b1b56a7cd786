# ABOUTME: Rich table rendering for crawl sessions and company-connection results.
# ABOUTME: Provides SessionTable and ResultsTable for the sessions and results commands.

from rich.table import Table

from linkedin_networker.models import CompanyConnectionResult, CrawlSession, CrawlStatus


def _truncate(text: str | None, max_length: int) -> str:
    """Truncate text to max length with ellipsis.

    Args:
        text: The text to truncate, or None.
        max_length: Maximum length before truncation.

    Returns:
        Truncated text with ellipsis, or empty string if None.
    """
    if text is None:
        return ""
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


class SessionTable:
    """Renders CrawlSession rows with color-coded status."""

    MAX_ERROR_LENGTH = 50

    STATUS_COLORS: dict[CrawlStatus, str] = {
        CrawlStatus.PENDING: "dim",
        CrawlStatus.RUNNING: "cyan",
        CrawlStatus.COMPLETED: "green",
        CrawlStatus.FAILED: "red",
    }

    def _get_status_styled(self, status: CrawlStatus) -> str:
        color = self.STATUS_COLORS.get(status, "white")
        return f"[{color}]{status.value}[/{color}]"

    def render(self, sessions: list[CrawlSession], title: str | None = None) -> Table:
        """Render crawl sessions as a Rich Table.

        Args:
            sessions: Sessions to display, in the order given.
            title: Optional title for the table.

        Returns:
            Rich Table with one row per session.
        """
        table = Table(title=title, show_lines=False)

        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Created", style="dim")
        table.add_column("Mode", style="magenta")
        table.add_column("Status")
        table.add_column("Progress", justify="right")
        table.add_column("Processed", justify="right")
        table.add_column("Error", style="red", max_width=self.MAX_ERROR_LENGTH)

        for crawl_session in sessions:
            processed = ""
            if crawl_session.total_connections is not None:
                processed = (
                    f"{crawl_session.processed_connections or 0}/"
                    f"{crawl_session.total_connections}"
                )
            table.add_row(
                str(crawl_session.id),
                crawl_session.created_at.strftime("%Y-%m-%d %H:%M"),
                crawl_session.mode.value,
                self._get_status_styled(crawl_session.status),
                f"{crawl_session.progress}%",
                processed,
                _truncate(crawl_session.error, self.MAX_ERROR_LENGTH),
            )

        return table


class ResultsTable:
    """Renders a session's company-connection rows grouped by company.

    The company name is printed only on the first row of each group.
    """

    MAX_HEADLINE_LENGTH = 40
    MAX_DESCRIPTION_LENGTH = 40

    def render(self, results: list[CompanyConnectionResult], title: str | None = None) -> Table:
        """Render joined results as a Rich Table.

        Args:
            results: Rows ordered by company name, as the store returns them.
            title: Optional title for the table.

        Returns:
            Rich Table with formatted results.
        """
        table = Table(title=title, show_lines=False)

        table.add_column("Company", style="magenta", no_wrap=True)
        table.add_column("Description", style="dim", max_width=self.MAX_DESCRIPTION_LENGTH)
        table.add_column("Connection", style="cyan")
        table.add_column("Headline", style="white", max_width=self.MAX_HEADLINE_LENGTH)
        table.add_column("Path", style="green")

        previous_company = None
        for row in results:
            first_in_group = row.company_id != previous_company
            previous_company = row.company_id
            table.add_row(
                row.company_name if first_in_group else "",
                _truncate(row.company_description, self.MAX_DESCRIPTION_LENGTH)
                if first_in_group
                else "",
                row.connection_name,
                _truncate(row.connection_headline, self.MAX_HEADLINE_LENGTH),
                row.connection_path,
            )

        return table
