"""Rich-based rendering for validation results and composite events.

Requires the 'rich' package: pip install validation-chain[rich]
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from validation_chain.events import (
    ValidationEvent,
    ValidationEventType,
    ValidationObserver,
)

if TYPE_CHECKING:
    from rich.console import Console, Group

    from validation_chain.results import ValidationResult

__all__ = ["RichEventObserver", "build_result_display", "render_result"]

_EVENT_STYLES = {
    ValidationEventType.VALIDATION_STARTED: "bold blue",
    ValidationEventType.VALIDATION_COMPLETED: "bold",
    ValidationEventType.STEP_COMPLETED: "dim",
    ValidationEventType.SHORT_CIRCUITED: "yellow",
    ValidationEventType.CONDITION_EVALUATED: "cyan",
}


class RichEventObserver(ValidationObserver):
    """Print one console line per composite event.

    Example:
        observer = RichEventObserver()
        chain = ChainBuilder("signup").add(...).observe(observer).build()
        chain.validate(form)

    Requires:
        pip install rich
    """

    def __init__(self, console: Console | None = None) -> None:
        from rich.console import Console

        self._console = console or Console()

    def on_event(self, event: ValidationEvent) -> None:
        """Render the event as a single styled line.

        Args:
            event: The validation event to handle.
        """
        from rich.text import Text

        data = event.data
        source = getattr(event.source, "name", "") or type(event.source).__name__
        text = Text()
        text.append(f"{event.event_type.name:<21}", style=_EVENT_STYLES[event.event_type])
        text.append(f" {source}")

        if event.event_type == ValidationEventType.STEP_COMPLETED:
            mark = "[green]✓[/]" if data.get("is_valid") else "[red]✗[/]"
            text.append(f"  #{data.get('index')} {data.get('validator_name')} ")
            text.append(Text.from_markup(mark))
        elif event.event_type == ValidationEventType.VALIDATION_COMPLETED:
            status = "valid" if data.get("is_valid") else f"{data.get('error_count', 0)} error(s)"
            text.append(f"  {status} in {data.get('duration_ms', 0.0):.1f}ms")
        elif event.event_type == ValidationEventType.SHORT_CIRCUITED:
            text.append(f"  at #{data.get('index')}, skipped {data.get('skipped', 0)}")
        elif event.event_type == ValidationEventType.CONDITION_EVALUATED:
            text.append(f"  condition met: {data.get('condition_met')}")

        self._console.print(text)


def build_result_display(result: ValidationResult, title: str = "Validation Result") -> Group:
    """Build a renderable summary: an error table and a context panel.

    Args:
        result: The result to display.
        title: Title shown above the error table.

    Returns:
        Rich Group containing the components.
    """
    from rich.console import Group
    from rich.panel import Panel
    from rich.table import Table
    from rich.text import Text

    status = Text()
    if result.is_valid:
        status.append("✓ valid", style="bold green")
    else:
        status.append(f"✗ invalid ({len(result.errors)} error(s))", style="bold red")

    table = Table(title=title, show_header=True, header_style="bold magenta", expand=True)
    table.add_column("Code", style="yellow")
    table.add_column("Field", style="cyan")
    table.add_column("Message")
    table.add_column("Value", style="red")

    for error in result.errors:
        value = "" if error.value is None else str(error.value)
        # Truncate long values
        display_value = value[:40] + "..." if len(value) > 40 else value
        table.add_row(error.code, error.field or "-", error.message, display_value)

    if not result.errors:
        table.add_row("-", "-", "No errors", "-")

    context_text = Text()
    for key, value in result.context.items():
        context_text.append(f"{key}", style="bold")
        context_text.append(f" = {value!r}\n")

    if not result.context:
        context_text = Text("(empty)", style="dim")

    return Group(
        status,
        table,
        Panel(context_text, title="[bold]Context[/]", border_style="blue"),
    )


def render_result(
    result: ValidationResult,
    console: Console | None = None,
    title: str = "Validation Result",
) -> None:
    """Print a result summary to the console.

    Requires:
        pip install rich
    """
    from rich.console import Console

    (console or Console()).print(build_result_display(result, title=title))
