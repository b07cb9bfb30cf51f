"""CLI application entry point and command routing for action-cli.

This module is the **sole error boundary** for the entire application.
It catches :class:`~action_cli.exceptions.ActionCliError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages and returning well-defined exit codes.
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import sys
from pathlib import Path

from action_cli.cli import exit_codes
from action_cli.cli.console import configure_logging, console
from action_cli.config import Settings, get_settings
from action_cli.core.models import TemplateInfo
from action_cli.exceptions import ActionCliError
from action_cli.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``action create <project>`` — scaffold a project from a template
    * ``action list``             — show registered templates
    * ``action doctor``           — environment diagnostics
    * ``action --version``
    """
    parser = argparse.ArgumentParser(
        prog="action",
        description="Create projects from git-hosted templates.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging.")
    parser.add_argument(
        "--no-update-check",
        dest="update_check",
        action="store_false",
        help="Skip the check for a newer action-cli release.",
    )

    commands = parser.add_subparsers(dest="command")

    create = commands.add_parser("create", help="Create a project from a template.")
    create.add_argument("project", help="Name of the project directory to create.")
    create.add_argument(
        "-t",
        "--template",
        default=None,
        help="Template name from templates.json, or a git URL. Prompts when omitted.",
    )
    create.add_argument("-b", "--branch", default=None, help="Template branch to clone.")
    create.add_argument("--pm", default=None, help="Package manager for the next-step hints.")
    create.add_argument(
        "--estimate",
        action="store_true",
        help="Show an estimated-time progress bar instead of a retrying spinner.",
    )

    commands.add_parser("list", help="List registered templates.")
    commands.add_parser("doctor", help="Run environment diagnostics.")
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _run_update_check() -> None:
    from action_cli.cli.update_notice import PACKAGE_NAME, check_version

    asyncio.run(check_version(PACKAGE_NAME, __version__))


def _resolve_template(
    source: str | None,
    branch: str | None,
    settings: Settings,
) -> TemplateInfo:
    """Turn the ``--template`` value into a :class:`TemplateInfo`."""
    from action_cli.cli.template_prompt import prompt_template_selection
    from action_cli.core.templates import default_branch, is_http_url
    from action_cli.exceptions import InvalidTemplateURLError, append_template_list_suggestion
    from action_cli.infra.template_store import TemplateStore

    store = TemplateStore(settings.templates_file, fallback_branch=settings.default_branch)

    if source is None:
        template = prompt_template_selection(store.load())
    elif source in store.read_raw():
        template = store.get(source)
    elif is_http_url(source):
        template = TemplateInfo(url=source, branch=default_branch(source, settings.default_branch))
    else:
        raise InvalidTemplateURLError(
            f"{source!r} is neither a registered template nor a URL.",
            hint=append_template_list_suggestion("Pass a template name or a git URL."),
        )

    if branch:
        template = dataclasses.replace(template, branch=branch)
    return template


def _handle_create(args: argparse.Namespace, settings: Settings) -> int:
    """Clone the chosen template into ``./<project>``."""
    from action_cli.cli.progress import EstimatedProgress, RichSpinner
    from action_cli.core.task_runner import TaskRunner
    from action_cli.core.templates import TemplateFetchService, resolve_package_manager
    from action_cli.exceptions import ProjectExistsError
    from action_cli.infra.git_clone import GitCloneProvider
    from action_cli.infra.git_detector import require_git

    project: str = args.project
    destination = Path.cwd() / project
    if destination.exists():
        raise ProjectExistsError(
            f"Directory {destination} already exists.",
            hint="Choose another project name or remove the directory.",
        )
    require_git()

    template = _resolve_template(args.template, args.branch, settings)
    console.print(f"\n[bold]Creating {project}[/bold] from {template.url} ({template.branch})\n")

    provider = GitCloneProvider(Path.cwd())
    if args.estimate:
        service = TemplateFetchService(provider)
        asyncio.run(
            service.fetch_with_estimate(
                project, template, EstimatedProgress(), estimate_ms=settings.clone_estimate_ms,
            )
        )
    else:
        service = TemplateFetchService(
            provider,
            TaskRunner(RichSpinner),
            max_retries=settings.max_retries,
            retry_delay_ms=settings.retry_delay_ms,
        )
        outcome = asyncio.run(service.fetch(project, template))
        if not outcome.ok:
            console.print(
                f"[bold red]Could not create {project}[/bold red] "
                f"after {outcome.attempts} attempts: {outcome.error}"
            )
            hint = getattr(outcome.error, "hint", None)
            if hint:
                console.print(f"[yellow]Hint:[/yellow] {hint}")
            return exit_codes.GENERAL_ERROR

    pm = resolve_package_manager(args.pm, resolve_package_manager(settings.package_manager))
    console.print(f"\n[bold green]Project {project} created.[/bold green]\n")
    console.print(f"  cd {project}")
    console.print(f"  {pm} install")
    console.print(f"  {pm} run dev\n")
    return exit_codes.SUCCESS


def _handle_list(settings: Settings) -> int:
    """Print the template registry."""
    from action_cli.cli.template_prompt import display_template_table
    from action_cli.infra.template_store import TemplateStore

    store = TemplateStore(settings.templates_file, fallback_branch=settings.default_branch)
    templates = store.load()
    if not templates:
        console.print(f"[yellow]No templates registered in {store.path}.[/yellow]")
        return exit_codes.SUCCESS
    display_template_table(templates)
    return exit_codes.SUCCESS


def _handle_doctor(settings: Settings) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from action_cli.cli.doctor import run_doctor

    return run_doctor(settings)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the action CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    configure_logging(args.verbose)
    settings = get_settings()

    if args.update_check:
        _run_update_check()

    if args.command == "create":
        return _handle_create(args, settings)
    if args.command == "list":
        return _handle_list(settings)
    return _handle_doctor(settings)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point."""
    try:
        code = main()
        sys.exit(code)
    except ActionCliError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
