# ABOUTME: CLI for crawling a LinkedIn network and browsing the results using Typer.
# ABOUTME: Provides login, crawl, session browsing and export commands with ToS acceptance flow.

import asyncio
from datetime import UTC, datetime
from pathlib import Path
from typing import Annotated
from uuid import UUID

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.prompt import Confirm, Prompt
from rich.table import Table

from linkedin_networker.auth import CredentialManager, LinkedInCredentials
from linkedin_networker.config import Settings, get_settings
from linkedin_networker.crawl import CrawlService
from linkedin_networker.database import DatabaseService
from linkedin_networker.database.stats import get_database_stats
from linkedin_networker.display import (
    ResultsTable,
    SessionTable,
    display_crawl_failure,
    display_error,
    display_login_help,
)
from linkedin_networker.export import CSVExporter
from linkedin_networker.linkedin import LinkedInClient, LinkedInError
from linkedin_networker.log import configure_logging
from linkedin_networker.models import CrawlMode, CrawlSession, CrawlStatus

app = typer.Typer(
    name="linkedin-networker",
    help="Crawl your LinkedIn network and map which companies your connections work at.",
    add_completion=False,
)

console = Console()

TOS_WARNING_TEXT = """[bold yellow]⚠️  Terms of Service Warning[/bold yellow]

This tool automates a logged-in browser session and may violate LinkedIn's Terms of Service.

[bold]By using this tool, you acknowledge that:[/bold]
• You are solely responsible for how you use this tool
• Your LinkedIn account may be restricted or banned
• This tool is provided "as-is" without any warranties
• The authors are not liable for any consequences of using this tool

[bold red]Use at your own risk.[/bold red]

[dim]Set LINKEDIN_NETWORKER_TOS_ACCEPTED=true to skip this prompt.[/dim]"""


def _check_tos_acceptance() -> bool:
    """Check and prompt for ToS acceptance if needed.

    Returns:
        True if ToS is accepted, False otherwise.
    """
    settings = get_settings()

    if settings.tos_accepted:
        return True

    console.print(Panel(TOS_WARNING_TEXT, title="LinkedIn Networker", border_style="yellow"))
    console.print()

    if Confirm.ask("[bold]Do you accept these terms and wish to continue?[/bold]"):
        console.print("[green]Terms accepted. Proceeding...[/green]\n")
        return True

    console.print("[red]Terms declined. Exiting.[/red]")
    return False


def _open_database(settings: Settings) -> DatabaseService:
    db_service = DatabaseService(db_path=settings.db_path)
    db_service.init_db()
    return db_service


def _require_session(service: CrawlService, session_id: str) -> CrawlSession:
    crawl_session = service.get_session(session_id)
    if crawl_session is None:
        console.print(f"[red]Error: Session '{session_id}' not found.[/red]")
        console.print("[dim]Run 'linkedin-networker sessions' to list sessions.[/dim]")
        raise typer.Exit(code=1)
    return crawl_session


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """LinkedIn network crawler CLI tool.

    Crawl the companies your connections work at, then browse,
    filter and export the results.
    """
    configure_logging(get_settings().log_level)
    if ctx.invoked_subcommand is None:
        console.print("[dim]Use --help to see available commands.[/dim]")


async def _verify_login(settings: Settings, credentials: LinkedInCredentials) -> None:
    client = LinkedInClient(settings)
    try:
        await client.start()
        await client.login(credentials)
    finally:
        await client.close()


@app.command()
def login(
    account: Annotated[
        str,
        typer.Option(
            "--account",
            "-a",
            help="Account name to store the credentials under.",
        ),
    ] = "default",
    verify: Annotated[
        bool,
        typer.Option(
            "--verify/--no-verify",
            help="Sign in with a browser before storing the credentials.",
        ),
    ] = False,
) -> None:
    """Store LinkedIn login credentials.

    Securely stores your LinkedIn email and password in the OS keyring
    for use by crawl sessions.
    """
    if not _check_tos_acceptance():
        raise typer.Exit(code=1)

    settings = get_settings()
    credential_manager = CredentialManager(settings.accounts_file)

    email = Prompt.ask("[bold]LinkedIn email[/bold]")
    password = Prompt.ask("[bold]LinkedIn password[/bold]", password=True)

    try:
        credentials = LinkedInCredentials(email=email, password=password)
    except ValidationError:
        console.print("[red]Error: Enter a valid email address and a password.[/red]")
        raise typer.Exit(code=1) from None

    if verify:
        console.print("[dim]Signing in to LinkedIn...[/dim]")
        try:
            asyncio.run(_verify_login(settings, credentials))
        except LinkedInError as e:
            console.print(display_error(e))
            console.print(display_login_help())
            raise typer.Exit(code=1) from None

    credential_manager.store_credentials(credentials, account)
    console.print(
        f"[green]Success! Credentials stored for account '[bold]{account}[/bold]'.[/green]"
    )


async def _watch_crawl(
    service: CrawlService,
    session_id: UUID,
    credentials: LinkedInCredentials,
    poll_interval: float,
) -> CrawlSession | None:
    """Start a session and render its progress by polling the session row."""
    task = service.start_session(session_id, credentials)
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            TextColumn("{task.percentage:>3.0f}%"),
            console=console,
        ) as progress:
            bar = progress.add_task("pending", total=100)
            while not task.done():
                await asyncio.wait({task}, timeout=poll_interval)
                current = service.get_session(session_id)
                if current is not None:
                    progress.update(
                        bar, completed=current.progress, description=current.status.value
                    )
        await task
    except asyncio.CancelledError:
        await service.cancel_session(session_id)
        raise
    finally:
        await service.shutdown()
    return service.get_session(session_id)


@app.command()
def crawl(
    mode: Annotated[
        CrawlMode,
        typer.Option(
            "--mode",
            "-m",
            help="Which part of your network to crawl.",
        ),
    ] = CrawlMode.FIRST_CONNECTIONS,
    account: Annotated[
        str,
        typer.Option(
            "--account",
            "-a",
            help="Account name to use for authentication.",
        ),
    ] = "default",
    max_connections: Annotated[
        int | None,
        typer.Option(
            "--max-connections",
            min=1,
            help="Maximum connections analyzed in friends_of_friends mode.",
        ),
    ] = None,
    rate_limit_ms: Annotated[
        int | None,
        typer.Option(
            "--rate-limit",
            min=0,
            help="Delay between items in milliseconds (at least 1000 is used).",
        ),
    ] = None,
    show_browser: Annotated[
        bool,
        typer.Option(
            "--show-browser",
            help="Run the browser with a visible window.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show the full error text when the crawl fails.",
        ),
    ] = False,
) -> None:
    """Start a crawl session and follow its progress.

    Press Ctrl-C to cancel; the session is then marked failed.
    """
    if not _check_tos_acceptance():
        raise typer.Exit(code=1)

    settings = get_settings()
    overrides: dict[str, object] = {}
    if max_connections is not None:
        overrides["max_connections"] = max_connections
    if rate_limit_ms is not None:
        overrides["rate_limit_ms"] = rate_limit_ms
    if show_browser:
        overrides["headless"] = False
    if overrides:
        settings = settings.model_copy(update=overrides)

    credentials = CredentialManager(settings.accounts_file).get_credentials(account)
    if credentials is None:
        console.print(f"[red]Error: No credentials stored for account '{account}'.[/red]")
        console.print()
        console.print(display_login_help())
        raise typer.Exit(code=1)

    service = CrawlService(_open_database(settings), settings)
    crawl_session = service.create_session(mode)
    console.print(f"[dim]Session {crawl_session.id} ({mode.value})[/dim]")

    try:
        final = asyncio.run(
            _watch_crawl(service, crawl_session.id, credentials, settings.poll_interval_seconds)
        )
    except KeyboardInterrupt:
        console.print("[yellow]Crawl cancelled.[/yellow]")
        raise typer.Exit(code=130) from None

    if final is None or final.status != CrawlStatus.COMPLETED:
        error_text = final.error if final is not None and final.error else "Unknown error"
        console.print(display_crawl_failure(error_text, verbose=verbose))
        raise typer.Exit(code=1)

    count = len(service.get_results(crawl_session.id))
    console.print(f"[green]Crawl completed with {count} company connection(s).[/green]")
    console.print(f"[dim]Run 'linkedin-networker results {crawl_session.id}' to view them.[/dim]")


@app.command()
def sessions() -> None:
    """List crawl sessions, newest first."""
    settings = get_settings()
    service = CrawlService(_open_database(settings), settings)

    crawl_sessions = service.list_sessions()
    if not crawl_sessions:
        console.print("[yellow]No crawl sessions yet.[/yellow]")
        return

    console.print(SessionTable().render(crawl_sessions, title="Crawl Sessions"))


@app.command()
def results(
    session_id: Annotated[str, typer.Argument(help="Session ID to show results for.")],
    search: Annotated[
        str | None,
        typer.Option(
            "--search",
            "-s",
            help="Filter by connection name or headline, company name or description.",
        ),
    ] = None,
) -> None:
    """Show the companies and connections found by a session."""
    settings = get_settings()
    service = CrawlService(_open_database(settings), settings)
    crawl_session = _require_session(service, session_id)

    rows = service.get_results(crawl_session.id, search=search)
    if not rows:
        console.print("[yellow]No results found.[/yellow]")
        return

    companies = len({row.company_id for row in rows})
    console.print(ResultsTable().render(rows, title=f"Results for {crawl_session.id}"))
    console.print()
    console.print(f"[green]{len(rows)} connection(s) at {companies} company(ies).[/green]")


@app.command()
def delete(
    session_id: Annotated[str, typer.Argument(help="Session ID to delete.")],
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Delete without asking for confirmation.",
        ),
    ] = False,
) -> None:
    """Delete a session together with its connections and links."""
    settings = get_settings()
    service = CrawlService(_open_database(settings), settings)
    crawl_session = _require_session(service, session_id)

    if not yes and not Confirm.ask(f"Delete session {crawl_session.id} and its results?"):
        console.print("[dim]Nothing deleted.[/dim]")
        return

    asyncio.run(service.delete_session(crawl_session.id))
    console.print(f"[green]Deleted session {crawl_session.id}.[/green]")


def _generate_default_export_path() -> Path:
    timestamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S")
    return Path(f"linkedin_network_{timestamp}.csv")


@app.command()
def export(
    session_id: Annotated[str, typer.Argument(help="Session ID to export.")],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output file path. Defaults to linkedin_network_{timestamp}.csv",
        ),
    ] = None,
    search: Annotated[
        str | None,
        typer.Option(
            "--search",
            "-s",
            help="Filter by connection name or headline, company name or description.",
        ),
    ] = None,
) -> None:
    """Export a session's results to CSV."""
    settings = get_settings()
    service = CrawlService(_open_database(settings), settings)
    crawl_session = _require_session(service, session_id)

    output_path = output if output is not None else _generate_default_export_path()
    rows = service.get_results(crawl_session.id, search=search)
    result_path = CSVExporter().export(rows, output_path, session_id=str(crawl_session.id))

    if not rows:
        console.print("[yellow]No records to export.[/yellow]")
    else:
        console.print(f"[green]Exported {len(rows)} record(s) to:[/green]")
    console.print(f"  [cyan]{result_path}[/cyan]")


def _render_database_stats_panel(stats: dict[str, object]) -> Panel:
    """Render database statistics as a Rich Panel.

    Args:
        stats: Dictionary of database statistics from get_database_stats.

    Returns:
        Rich Panel containing formatted database statistics.
    """
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Label", style="dim")
    table.add_column("Value")

    table.add_row("Crawl Sessions:", f"[cyan]{stats.get('total_sessions', 0)}[/cyan]")

    by_status = stats.get("sessions_by_status", {})
    if by_status and isinstance(by_status, dict):
        parts = [f"{status}: {count}" for status, count in sorted(by_status.items())]
        table.add_row("By Status:", ", ".join(parts))

    table.add_row("Companies:", f"[cyan]{stats.get('total_companies', 0)}[/cyan]")
    table.add_row("Connections:", f"[cyan]{stats.get('total_connections', 0)}[/cyan]")
    table.add_row("Company Links:", f"[cyan]{stats.get('total_links', 0)}[/cyan]")

    degree_dist = stats.get("degree_distribution", {})
    if degree_dist and isinstance(degree_dist, dict):
        degree_parts = []
        for degree, count in sorted(degree_dist.items()):
            degree_label = {1: "1st", 2: "2nd"}.get(degree, f"{degree}th")
            degree_parts.append(f"{degree_label}: {count}")
        table.add_row("By Degree:", ", ".join(degree_parts))

    return Panel(
        table,
        title="Database Statistics",
        border_style="blue",
        padding=(1, 2),
    )


def _render_accounts_panel(accounts: list[str]) -> Panel:
    content: str | Table
    if not accounts:
        content = "[dim]No accounts stored. Run 'linkedin-networker login' to add one.[/dim]"
    else:
        table = Table(show_header=True, box=None, padding=(0, 1))
        table.add_column("Account", style="cyan")
        for account in accounts:
            table.add_row(account)
        content = table

    return Panel(
        content,
        title="Stored Accounts",
        border_style="magenta",
        padding=(1, 2),
    )


@app.command()
def status() -> None:
    """Show database statistics and stored accounts."""
    settings = get_settings()
    db_service = _open_database(settings)

    console.print(_render_database_stats_panel(get_database_stats(db_service)))
    console.print()
    console.print(_render_accounts_panel(CredentialManager(settings.accounts_file).list_accounts()))


if __name__ == "__main__":
    app()
