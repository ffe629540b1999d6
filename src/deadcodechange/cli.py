"""deadcodechange CLI — Typer application with analyze, check, profiles, and init."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from deadcodechange import __version__

app = typer.Typer(
    name="deadcodechange",
    help="Tell whether commits invalidate a previous dead code analysis.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _configure_logging(verbose: bool, debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=debug, rich_tracebacks=debug)],
        force=True,
    )


def _fail(label: str, exc: Exception) -> typer.Exit:
    console.print(f"[bold red]{label}:[/bold red] {exc}")
    return typer.Exit(code=2)


def _resolve_repo_root() -> Path:
    """Find the git repo root, exit 2 on failure."""
    from deadcodechange.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError as exc:
        raise _fail("Error", exc) from exc


def _prepare(
    repo_root: Path,
    config: Optional[str],
    profile: Optional[str],
    consider_all_blocks: bool,
    jobs: Optional[int],
    format: Optional[str],
):
    """Load config, apply CLI overrides, and build the analyzer."""
    from deadcodechange.config.loader import ConfigError, load_config, resolve_patterns
    from deadcodechange.config.schema import OUTPUT_FORMATS
    from deadcodechange.pipeline.engine import DeadCodeChangeAnalyzer
    from deadcodechange.profiles.registry import build_registry

    try:
        cfg = load_config(repo_root, config)
    except ConfigError as exc:
        raise _fail("Config error", exc) from exc

    # --- CLI overrides ---
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if profile:
        cfg.files.profile = profile
    if consider_all_blocks:
        cfg.analysis.consider_all_blocks = True
    if jobs is not None:
        cfg.analysis.jobs = jobs

    try:
        registry = build_registry(repo_root)
        patterns = resolve_patterns(cfg, registry)
    except ConfigError as exc:
        raise _fail("Config error", exc) from exc

    logging.getLogger(__name__).info(
        "Profile %s, consider all blocks: %s, jobs: %d",
        patterns.profile or "<custom>",
        cfg.analysis.consider_all_blocks,
        cfg.analysis.jobs,
    )
    analyzer = DeadCodeChangeAnalyzer(patterns, cfg.analysis.consider_all_blocks)
    return cfg, analyzer


def _run(analyzer, commits: Iterable, jobs: int):
    from deadcodechange.pipeline.engine import AnalysisError

    try:
        return analyzer.analyze_commits(commits, jobs=jobs)
    except AnalysisError as exc:
        raise _fail("Analysis error", exc) from exc


def _emit(report, cfg, output: Optional[str]) -> None:
    from deadcodechange.output import json_report, terminal

    report_text: Optional[str] = None

    if cfg.output.format == "terminal":
        terminal.render(
            report,
            show_summary=cfg.output.show_summary,
            show_evidence=cfg.output.show_evidence,
            console=console,
        )
    else:
        report_text = json_report.render(report)
        print(report_text)

    # --- Write to file ---
    if output:
        if report_text is None:
            # Terminal output was requested; the file gets JSON
            report_text = json_report.render(report)
        Path(output).write_text(report_text, encoding="utf-8")
        logging.getLogger(__name__).info("Report written to %s", output)


def _exit_code(report, exit_zero: bool) -> int:
    if report.requires_reanalysis and not exit_zero:
        return 1
    return 0


# ── analyze ───────────────────────────────────────────────────────────────────


@app.command()
def analyze(
    revisions: Optional[List[str]] = typer.Argument(None, help="Commits or A..B ranges (default: HEAD)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .deadcodechange.toml"),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="Product-line profile id"),
    consider_all_blocks: bool = typer.Option(False, "--consider-all-blocks", help="Treat every preprocessor block as relevant"),
    jobs: Optional[int] = typer.Option(None, "--jobs", "-j", min=1, help="Concurrent analysis workers"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write JSON report to file"),
    exit_zero: bool = typer.Option(False, "--exit-zero", help="Exit 0 even if a refresh is warranted"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output with per-line decisions"),
) -> None:
    """Analyze commits of the current git repository."""
    from deadcodechange.git.adapter import GitError, get_revision_diff
    from deadcodechange.git.diff_parser import DiffParser

    _configure_logging(verbose, debug)
    repo_root = _resolve_repo_root()
    cfg, analyzer = _prepare(repo_root, config, profile, consider_all_blocks, jobs, format)

    # --- Get diffs ---
    diff_texts: List[str] = []
    try:
        for rev in revisions or ["HEAD"]:
            diff_texts.append(get_revision_diff(repo_root, rev, cfg.git.context_lines))
    except GitError as exc:
        raise _fail("Git error", exc) from exc

    def commits() -> Iterator:
        for text in diff_texts:
            yield from DiffParser(text).parse()

    report = _run(analyzer, commits(), cfg.analysis.jobs)
    _emit(report, cfg, output)
    raise typer.Exit(code=_exit_code(report, exit_zero))


# ── check ─────────────────────────────────────────────────────────────────────


@app.command()
def check(
    patch: str = typer.Argument(..., help="Patch file, or - for stdin"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .deadcodechange.toml"),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="Product-line profile id"),
    consider_all_blocks: bool = typer.Option(False, "--consider-all-blocks", help="Treat every preprocessor block as relevant"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write JSON report to file"),
    exit_zero: bool = typer.Option(False, "--exit-zero", help="Exit 0 even if a refresh is warranted"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output with per-line decisions"),
) -> None:
    """Analyze a patch file without a git repository."""
    from deadcodechange.git.adapter import GitError, get_repo_root
    from deadcodechange.git.diff_parser import DiffParser

    _configure_logging(verbose, debug)
    try:
        repo_root = get_repo_root()
    except GitError:
        repo_root = Path.cwd()

    cfg, analyzer = _prepare(repo_root, config, profile, consider_all_blocks, None, format)

    if patch == "-":
        diff_text = sys.stdin.read()
        commit_id = "stdin"
    else:
        try:
            diff_text = Path(patch).read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise _fail("Error", exc) from exc
        commit_id = Path(patch).name

    commits = DiffParser(diff_text, default_commit_id=commit_id).parse()
    report = _run(analyzer, commits, cfg.analysis.jobs)
    _emit(report, cfg, output)
    raise typer.Exit(code=_exit_code(report, exit_zero))


# ── profiles ──────────────────────────────────────────────────────────────────


@app.command()
def profiles() -> None:
    """List the available product-line profiles."""
    from deadcodechange.config.loader import ConfigError
    from deadcodechange.git.adapter import GitError, get_repo_root
    from deadcodechange.profiles.registry import build_registry

    try:
        repo_root: Optional[Path] = get_repo_root()
    except GitError:
        repo_root = None

    try:
        registry = build_registry(repo_root)
    except ConfigError as exc:
        raise _fail("Config error", exc) from exc

    table = Table(title="Profiles", title_style="bold", border_style="dim")
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Description", style="dim")
    for p in registry.all_profiles:
        table.add_row(p.id, p.name, p.description)
    Console().print(table)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .deadcodechange.toml in the repo root."""
    from deadcodechange.config.defaults import DEFAULT_TOML
    from deadcodechange.config.loader import CONFIG_FILE_NAME

    repo_root = _resolve_repo_root()
    config_path = repo_root / CONFIG_FILE_NAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILE_NAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"deadcodechange {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """deadcodechange — flag commits that invalidate dead code analysis results."""
