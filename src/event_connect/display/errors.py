# ABOUTME: Error display helpers for formatting error messages with Rich.
# ABOUTME: Provides user-friendly panels for validation failures, store outages, and generic errors.

import traceback

from rich.panel import Panel
from rich.text import Text

from event_connect.ledger.exceptions import LedgerError, LedgerValidationError
from event_connect.profiles.exceptions import ProfileValidationError


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

    if isinstance(error, ProfileValidationError) and error.errors:
        content.append("\n")
        for field, message in error.errors.items():
            content.append(f"\n• {field}: ", style="bold")
            content.append(message, style="yellow")

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


def display_store_failure(error: LedgerError) -> Panel:
    """Display a retry message for a failed ledger operation.

    Args:
        error: The ledger error raised by a failed store call.

    Returns:
        A Rich Panel telling the user the action can be retried safely.
    """
    if isinstance(error, LedgerValidationError):
        return display_error(error)

    message = Text()
    message.append("Could not complete the action\n\n", style="bold red")
    message.append(f"{error}\n\n", style="red")
    message.append("Nothing was changed. Try again in a few moments.", style="dim")

    return Panel(
        message,
        title="Try Again",
        border_style="yellow",
        padding=(1, 2),
    )
