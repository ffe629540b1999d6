"""Rich terminal reporter — one row per commit, verdict and summary."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from deadcodechange.results.models import AnalysisReport, CommitOutcome

_SHORT_ID = 12


def _flag(value: bool) -> Text:
    return Text("yes", style="bold yellow") if value else Text("no", style="dim")


def _verdict(outcome: CommitOutcome) -> Text:
    if outcome.requires_reanalysis:
        return Text(" REFRESH ", style="bold white on dark_orange")
    return Text(" SKIP ", style="bold black on bright_cyan")


def _code_cell(outcome: CommitOutcome) -> str:
    if not outcome.relevant_code_paths:
        return "-"
    return "\n".join(sorted(outcome.relevant_code_paths))


def render(
    report: AnalysisReport,
    *,
    show_summary: bool = True,
    show_evidence: bool = False,
    console: Optional[Console] = None,
) -> None:
    """Print the analysis report to the terminal using Rich."""
    console = console or Console(stderr=True)

    if not report.outcomes:
        console.print()
        console.print("[dim]No commits analyzed.[/dim]")
        if show_summary:
            _print_summary(console, report)
        return

    console.print()
    table = Table(
        title="Dead Code Change Analysis",
        show_lines=True,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Commit", style="cyan", no_wrap=True)
    table.add_column("Relevant code files", style="magenta")
    table.add_column("Build", justify="center")
    table.add_column("Model", justify="center")
    table.add_column("Verdict", justify="center", width=11)

    for outcome in report.outcomes:
        table.add_row(
            outcome.commit_id[:_SHORT_ID],
            _code_cell(outcome),
            _flag(outcome.relevant_build_changes),
            _flag(outcome.relevant_model_changes),
            _verdict(outcome),
        )

    console.print(table)

    if show_evidence:
        _print_evidence(console, report)

    if show_summary:
        _print_summary(console, report)

    console.print()
    relevant = len(report.relevant_outcomes)
    if relevant:
        console.print(
            f"[bold yellow]{relevant} commit(s) change variability-relevant "
            "artifacts; dead code analysis results are stale.[/bold yellow]"
        )
    else:
        console.print(
            "[bold green]No variability-relevant changes; "
            "previous dead code analysis results still hold.[/bold green]"
        )


def _print_evidence(console: Console, report: AnalysisReport) -> None:
    for outcome in report.relevant_outcomes:
        console.print()
        console.print(f"[bold]{outcome.commit_id[:_SHORT_ID]}[/bold]")
        for item in outcome.evidence:
            console.print(
                f"  [cyan]{item.path}[/cyan]:[green]{item.line_index}[/green] "
                f"[dim]({item.file_type})[/dim] ",
                Text(item.line.rstrip()),
            )


def _print_summary(console: Console, report: AnalysisReport) -> None:
    console.print()
    console.print(f"[dim]Commits analyzed:[/dim] {report.analyzed_commits}")
    console.print(f"[dim]Relevant:[/dim]         {len(report.relevant_outcomes)}")
    console.print(f"[dim]Not analyzed:[/dim]     {len(report.not_analyzed)}")
    console.print(f"[dim]Duration:[/dim]         {report.duration_ms:.0f}ms")
