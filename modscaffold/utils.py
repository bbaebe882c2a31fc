"""Shared utility functions for modscaffold.

Provides the Rich console and the reporting helpers callers use to present
the outcome of a generation run.  The engine itself never prints; thin
command wrappers call these once a run is over.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from modscaffold.scaffolder.naming import class_basename

if TYPE_CHECKING:
    from modscaffold.scaffolder.discovery import ModuleInfo
    from modscaffold.scaffolder.ledger import GenerationLedger

console = Console()


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------


def display_path(path: str | Path, base: str | Path | None = None) -> str:
    """Return *path* relative to *base* when possible, POSIX-style.

    Examples::

        display_path("/srv/app/Modules/Blog/X.php", "/srv/app") -> "Modules/Blog/X.php"
        display_path("/elsewhere/X.php", "/srv/app")            -> "/elsewhere/X.php"
    """
    target = Path(path)
    if base is not None:
        try:
            return target.relative_to(Path(base)).as_posix()
        except ValueError:
            pass
    return target.as_posix()


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


OUTCOME_STYLES: dict[str, str] = {
    "success": "green",
    "skipped": "yellow",
    "failure": "red",
}


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def print_ledger_report(
    ledger: "GenerationLedger",
    title: str = "Generated files",
    base: str | Path | None = None,
) -> bool:
    """Print one row per ledger entry followed by the overall verdict.

    Args:
        ledger: The ledger of the finished run.
        title: Table title.
        base: Optional directory that paths are shown relative to.

    Returns:
        ``ledger.was_successful()``, so callers can turn it into an exit code.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Kind", no_wrap=True)
    table.add_column("Outcome", no_wrap=True)
    table.add_column("Detail")

    for entry in ledger:
        style = OUTCOME_STYLES.get(entry.outcome, "white")
        detail = display_path(entry.path, base) if entry.path is not None else entry.reason
        table.add_row(entry.kind, f"[{style}]{entry.outcome}[/{style}]", escape(detail))

    console.print(table)

    counts = ledger.summary()
    line = f"{counts['written']} written, {counts['skipped']} skipped, {counts['failed']} failed"
    if ledger.was_successful():
        print_success(f"Done: {line}")
    else:
        print_error(f"Finished with errors: {line}")
    return ledger.was_successful()


def print_modules_table(modules: list["ModuleInfo"], show_routes: bool = False) -> None:
    """Print the modules found by ``discover_modules``."""
    if not modules:
        print_warning("No modules found.")
        return

    table = Table(title="Modules", show_header=True, header_style="bold cyan")
    table.add_column("Module", no_wrap=True)
    table.add_column("Path")
    table.add_column("Provider")
    if show_routes:
        for route in ("Web", "API", "Console"):
            table.add_column(route, justify="center")

    for module in modules:
        row = [module.name, module.path.as_posix(), class_basename(module.provider)]
        if show_routes:
            row.extend(
                "[green]yes[/green]" if module.routes.get(route) else "[red]no[/red]"
                for route in ("web", "api", "console")
            )
        table.add_row(*row)

    console.print(table)
    console.print(f"Total modules: {len(modules)}")


def print_module_info(module: "ModuleInfo") -> None:
    """Print one module's details and its folder audit.

    Configured folders missing on disk are printed as warnings after the
    summary table.
    """
    routes = ", ".join(route for route, present in module.routes.items() if present) or "none"
    configured = len(module.folders) + len(module.missing_folders)
    print_summary_table(
        {
            "Path": module.path.as_posix(),
            "Provider": module.provider,
            "Routes": routes,
            "Folders": f"{len(module.folders)}/{configured} present",
            "Additional folders": ", ".join(module.additional_folders) or "none",
        },
        title=f"Module {module.name}",
    )
    for folder in module.missing_folders:
        print_warning(f"Missing folder: {escape(folder)}")
