# cmpkg_tool/cli/utils/output.py
"""Output formatting utilities"""

from typing import List

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ...constants import (
    EMOJI_ERROR,
    EMOJI_PACKAGE,
    EMOJI_ROCKET,
    EMOJI_SUCCESS,
    EMOJI_WARNING,
    SUMMARY_CONSOLE,
    SUMMARY_MARKDOWN,
)
from ...models import DeployRun, NotifyResult, PackResult, ScriptsPackResult
from ...utils.file_utils import format_size

console = Console()


def _yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def render_pack_markdown(result: PackResult) -> str:
    """Render a pack result as markdown"""
    lines = [
        "---",
        "## Packaging summary",
        "",
        f"- Package: `{result.archive_path}`",
        "",
        "### Files included in the package",
    ]
    lines.extend(f"- `{name}`" for name in result.files)
    if result.warnings:
        lines.append("")
        lines.append("### Warnings")
        lines.extend(f"- {w}" for w in result.warnings)
    lines.append("---")
    return "\n".join(lines)


def render_scripts_markdown(result: ScriptsPackResult) -> str:
    """Render a scripts pack result as markdown"""
    lines = [
        "---",
        "## Generated scripts packages",
        "",
        "### Generated files",
    ]
    lines.extend(f"- `{path}`" for path in result.generated)

    if result.renamed:
        lines.append("")
        lines.append("### Renamed files")
        lines.extend(f"- `{old}` » `{new}`" for old, new in result.renamed)

    if result.warnings:
        lines.append("")
        lines.append("### Warnings")
        lines.extend(f"- {w}" for w in result.warnings)

    lines.append("---")
    return "\n".join(lines)


def render_deploy_markdown(run: DeployRun) -> str:
    """Render a deploy run as markdown"""
    lines: List[str] = [
        "# Deploy report",
        "",
        "## Summary",
        "",
        f"- **Environment**: {run.environment}",
        f"- **Marketplace URL**: {run.marketplace_url}",
        f"- **Simulated**: {_yes_no(run.simulated)}",
        f"- **Duration**: {run.duration:.1f}s",
        f"- **Sent**: {len(run.sent)}",
        f"- **Skipped**: {len(run.skipped)}",
        f"- **Failed**: {len(run.failed)}",
    ]
    if run.cancelled:
        lines.append("- **Cancelled**: Yes")

    if run.sent:
        lines.extend(["", "## Sent", ""])
        for outcome in run.sent:
            unit = outcome.unit
            lines.append(f"### {unit.archive_name}")
            lines.append("")
            lines.append(f"- **Package**: {unit.package_name}")
            lines.append(f"- **Version**: {unit.version}")
            lines.append(f"- **Development**: {_yes_no(unit.is_development_build)}")
            if unit.company_code:
                lines.append(f"- **Company**: {unit.company_code}")
            if outcome.url:
                lines.append(f"- **URL**: [{unit.archive_name}]({outcome.url})")
            lines.append("")

    for title, outcomes in (("Skipped", run.skipped), ("Failed", run.failed)):
        if not outcomes:
            continue
        lines.extend(["", f"## {title}", ""])
        lines.extend(f"- **{o.unit.archive_name}**: {o.reason}" for o in outcomes)

    messages = run.errors + run.warnings
    if messages:
        lines.extend(["", "## Warnings", ""])
        lines.extend(f"- {m}" for m in messages)

    return "\n".join(lines)


def format_pack_result(result: PackResult) -> None:
    """Display pack operation result"""
    lines = [
        f"[green]{EMOJI_SUCCESS}[/green] Package created successfully!",
        "",
        f"[bold]Archive:[/bold] {result.archive_path}",
        f"[bold]Manifest:[/bold] {result.manifest_path}",
        f"[bold]Files:[/bold] {len(result.files)}",
        f"[bold]Size:[/bold] {format_size(result.archive_path.stat().st_size)}",
        f"[bold]Duration:[/bold] {result.duration:.1f}s",
    ]
    console.print(Panel("\n".join(lines), title=f"{EMOJI_PACKAGE} Pack Result", border_style="green"))

    table = Table(box=box.SIMPLE, show_header=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("File", style="cyan")
    for index, name in enumerate(result.files, 1):
        table.add_row(str(index), name)
    console.print(table)

    for warning in result.warnings:
        console.print(f"[yellow]{EMOJI_WARNING} {escape(warning)}[/yellow]")


def format_scripts_result(result: ScriptsPackResult) -> None:
    """Display scripts pack result"""
    table = Table(title=f"{EMOJI_PACKAGE} Scripts Packages", box=box.ROUNDED)
    table.add_column("Archive", style="cyan")
    table.add_column("Renamed to", style="green")

    renamed = {old: new for old, new in result.renamed}
    for path in result.generated:
        new = renamed.get(path)
        table.add_row(str(path), new.name if new else "")
    console.print(table)

    for warning in result.warnings:
        console.print(f"[yellow]{EMOJI_WARNING} {escape(warning)}[/yellow]")

    console.print(
        f"[green]{EMOJI_SUCCESS}[/green] {len(result.generated)} package(s) "
        f"generated in {result.duration:.1f}s"
    )


def format_deploy_result(run: DeployRun) -> None:
    """Display deploy run result"""
    title = f"{EMOJI_ROCKET} Deploy to {run.environment}"
    if run.simulated:
        title += " (simulated)"

    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Archive", style="cyan")
    table.add_column("Status")
    table.add_column("Details")

    for outcome in run.sent:
        table.add_row(outcome.unit.archive_name, "[green]sent[/green]", outcome.url or "")
    for outcome in run.skipped:
        table.add_row(outcome.unit.archive_name, "[yellow]skipped[/yellow]", escape(outcome.reason or ""))
    for outcome in run.failed:
        table.add_row(outcome.unit.archive_name, "[red]failed[/red]", escape(outcome.reason or ""))

    console.print(table)

    for message in run.errors:
        console.print(f"[red]{EMOJI_ERROR} {escape(message)}[/red]")
    for message in run.warnings:
        console.print(f"[yellow]{EMOJI_WARNING} {escape(message)}[/yellow]")

    console.print(
        f"Sent: [green]{len(run.sent)}[/green]  "
        f"Skipped: [yellow]{len(run.skipped)}[/yellow]  "
        f"Failed: [red]{len(run.failed)}[/red]  "
        f"({run.duration:.1f}s)"
    )


def format_notify_result(result: NotifyResult) -> None:
    """Display marketplace notify result"""
    if result.success:
        console.print(f"[green]{EMOJI_SUCCESS}[/green] Marketplace notified ({result})")
    else:
        console.print(f"[red]{EMOJI_ERROR} Marketplace notify failed: {escape(str(result))}[/red]")


def print_summary(summary: str, result, console_fn, markdown_fn) -> None:
    """Print a result in the requested summary format"""
    if summary == SUMMARY_CONSOLE:
        console_fn(result)
    elif summary == SUMMARY_MARKDOWN:
        console.print(markdown_fn(result), markup=False, highlight=False, soft_wrap=True)


def print_error(message: str, error: Exception = None) -> None:
    """Print error message"""
    if error:
        console.print(f"[red]Error:[/red] {escape(message)}: {escape(str(error))}")
    else:
        console.print(f"[red]Error:[/red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print warning message"""
    console.print(f"[yellow]Warning:[/yellow] {escape(message)}")
