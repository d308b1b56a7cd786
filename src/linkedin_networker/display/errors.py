# ABOUTME: Error display helpers for formatting error messages with Rich.
# ABOUTME: Provides user-friendly panels for login help, failed crawls and generic errors.

import traceback

from rich.panel import Panel
from rich.text import Text


def display_error(error: Exception, verbose: bool = False) -> Panel:
    """Format an error as a Rich Panel.

    Args:
        error: The exception to display.
        verbose: If True, include full traceback information.

    Returns:
        A Rich Panel containing formatted error information.
    """
    error_type = type(error).__name__
    error_message = str(error)

    content = Text()
    content.append(f"{error_type}: ", style="bold red")
    content.append(error_message, style="red")

    if verbose:
        content.append("\n\n")
        content.append("Traceback:", style="dim")
        content.append("\n")
        tb_text = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        content.append(tb_text, style="dim")

    return Panel(
        content,
        title="Error",
        border_style="red",
        padding=(1, 2),
    )


def display_login_help() -> Panel:
    """Display help for storing LinkedIn credentials and clearing challenges.

    Returns:
        A Rich Panel with the steps to store credentials.
    """
    help_text = """[bold cyan]How to store your LinkedIn login:[/bold cyan]

1. Run [bold]linkedin-networker login[/bold]
2. Enter the email address and password you use on [link=https://www.linkedin.com]LinkedIn[/link]
3. Credentials are kept in your OS keyring, never in plain files

[dim]If LinkedIn asks for a security challenge, sign in once in a normal browser,
complete the challenge there, then start the crawl again.[/dim]"""

    return Panel(
        Text.from_markup(help_text),
        title="Login Help",
        border_style="cyan",
        padding=(1, 2),
    )


def display_crawl_failure(error_text: str, verbose: bool = False) -> Panel:
    """Display the error text stored on a failed session.

    Args:
        error_text: The session's error field.
        verbose: If False, only the first line is shown.

    Returns:
        A Rich Panel with the failure message.
    """
    lines = error_text.strip().splitlines() or [""]
    message = Text()
    message.append("Crawl failed\n\n", style="bold red")
    message.append(error_text if verbose else lines[0], style="red")
    if not verbose and len(lines) > 1:
        message.append("\n\n")
        message.append("Run with --verbose to see the full error.", style="dim")

    return Panel(
        message,
        title="Crawl Failed",
        border_style="red",
        padding=(1, 2),
    )
