"""Interactive template selection and template table rendering.

Renders the template registry as a Rich table and lets the user pick a
template with questionary arrow keys.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from action_cli.cli.console import console
from action_cli.core.models import TemplateInfo
from action_cli.exceptions import EnvironmentError, TemplateSelectionError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive selection."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _import_rich_table() -> type[Any]:
    """Import rich table lazily for template rendering."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


def _build_choice_label(template: TemplateInfo) -> str:
    """Single-line label shown in the questionary selector."""
    if template.description:
        return f"{template.name}  —  {template.description}"
    return template.name


def display_template_table(templates: Sequence[TemplateInfo]) -> None:
    """Print a Rich table of the registered templates."""
    table_class = _import_rich_table()

    table = table_class(
        title="Templates",
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    table.add_column("Name", style="bold", min_width=10)
    table.add_column("Branch", min_width=6)
    table.add_column("URL")
    table.add_column("Description", style="dim")

    for template in templates:
        table.add_row(template.name, template.branch, template.url, template.description)

    console.print()
    console.print(table)
    console.print()


def prompt_template_selection(templates: Sequence[TemplateInfo]) -> TemplateInfo:
    """Prompt the user to pick one of *templates*.

    Raises
    ------
    TemplateSelectionError
        If there is nothing to choose from or the prompt is cancelled.
    """
    if not templates:
        raise TemplateSelectionError(
            "No templates are registered.",
            hint="Add entries to templates.json or pass a git URL with --template.",
        )

    questionary = _import_questionary()
    choices = [
        questionary.Choice(title=_build_choice_label(template), value=template.name)
        for template in templates
    ]
    selected: str | None = questionary.select(
        "Select a template:",
        choices=choices,
        use_arrow_keys=True,
        use_shortcuts=False,
    ).ask()  # Returns None on Ctrl+C / Esc

    if selected is None:
        raise TemplateSelectionError(
            "No template selected.",
            hint="Use arrow keys to pick a template, then press Enter.",
        )
    return next(template for template in templates if template.name == selected)
