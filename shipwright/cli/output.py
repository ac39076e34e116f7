# shipwright/cli/output.py
"""Output formatting utilities"""

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box
from rich.markup import escape

from ..constants import EMOJI_SUCCESS, EMOJI_ERROR, EMOJI_SKIP
from ..models import DeploymentResult, TaskOutcome, TaskReport

console = Console()

_OUTCOME_STYLES = {
    TaskOutcome.SUCCESS: ("green", EMOJI_SUCCESS, "OK"),
    TaskOutcome.FAILURE: ("red", EMOJI_ERROR, "FAIL"),
    TaskOutcome.SKIPPED: ("yellow", EMOJI_SKIP, "SKIPPED"),
    TaskOutcome.FATAL: ("red", EMOJI_ERROR, "ERROR"),
}


def print_task_report(report: TaskReport) -> None:
    """Print one task line as soon as the task finishes"""
    color, mark, label = _OUTCOME_STYLES[report.outcome]

    where = f" on [cyan]{report.host}[/cyan]" if report.host else ""
    rollback = " [dim](rollback)[/dim]" if report.in_rollback else ""
    line = (
        f"  [{color}]{mark}[/{color}] {report.task_name}{where}{rollback} "
        f"[dim]{report.stage}[/dim] [{color}]{label}[/{color}]"
    )
    if report.message:
        line += f" [dim]{escape(report.message)}[/dim]"

    console.print(line)


def format_deployment_result(result: DeploymentResult, show_tasks: bool = False) -> None:
    """Format and display a deployment or rollback result"""
    operation = result.operation.capitalize()

    if show_tasks and result.reports:
        table = Table(title=f"{operation} tasks", box=box.ROUNDED)
        table.add_column("Task", style="cyan")
        table.add_column("Stage")
        table.add_column("Host")
        table.add_column("Outcome")
        table.add_column("Time", justify="right")

        for report in result.reports:
            color, _, label = _OUTCOME_STYLES[report.outcome]
            table.add_row(
                report.task_name,
                report.stage,
                report.host or "-",
                f"[{color}]{label}[/{color}]",
                f"{report.duration:.2f}s",
            )
        console.print(table)

    lines = [
        f"[bold]Environment:[/bold] {result.environment}",
        f"[bold]Release:[/bold] {result.release_id}",
        f"[bold]Tasks:[/bold] {result.count(TaskOutcome.SUCCESS)} ok, "
        f"{result.count(TaskOutcome.SKIPPED)} skipped, "
        f"{result.count(TaskOutcome.FAILURE) + result.count(TaskOutcome.FATAL)} failed",
    ]
    if result.duration is not None:
        lines.append(f"[bold]Duration:[/bold] {result.duration:.1f}s")

    if result.success:
        lines.insert(0, f"[green]{EMOJI_SUCCESS}[/green] {operation} completed successfully!\n")
        console.print(Panel("\n".join(lines), title=f"{operation} Result", border_style="green"))
        return

    lines.insert(0, f"[red]{EMOJI_ERROR} {operation} failed:[/red] {escape(result.error or '')}\n")
    if result.failed_hosts:
        lines.append(f"[bold]Failed hosts:[/bold] {', '.join(result.failed_hosts)}")
    console.print(Panel("\n".join(lines), title=f"{operation} Error", border_style="red"))
