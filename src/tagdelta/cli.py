"""Command-line interface for tagdelta."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from tagdelta.app import AppContext
from tagdelta.errors import ConfigurationValidationError
from tagdelta.log_config import configure_logging
from tagdelta.models import Report, Settings, ViewerConfig

app = typer.Typer(
    name="tagdelta",
    help="Group Git tags by prefix and show the commits between consecutive tags",
    add_completion=False,
)
console = Console()


def _context(ctx: typer.Context) -> AppContext:
    return ctx.obj


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose log output"),
) -> None:
    """Set up settings, logging and the application context."""
    settings = Settings()
    configure_logging("INFO" if verbose else settings.log_level)
    ctx.obj = AppContext(settings, console=console)


@app.command()
def validate(
    ctx: typer.Context,
    repo_path: Path = typer.Argument(..., help="Path to Git repository"),
) -> None:
    """Check that a path is a Git repository."""
    is_valid, error = _context(ctx).validate_repository(repo_path)
    if not is_valid:
        console.print(f"[bold red]✗[/bold red] Not a valid Git repository: {error}")
        raise typer.Exit(1)
    console.print(f"[bold green]✓[/bold green] Git repository OK: {repo_path}")


@app.command()
def refresh(
    ctx: typer.Context,
    repo_path: Path = typer.Argument(..., help="Path to Git repository"),
) -> None:
    """Delete all local tags and pull them again from the remote."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Refreshing tags...", total=None)
        result = _context(ctx).refresh_tags(repo_path)
        progress.update(task, completed=True)

    if not result.success:
        console.print(f"[bold red]Error:[/bold red] {result.error}")
        raise typer.Exit(1)
    console.print("[bold green]✓[/bold green] Tags refreshed")


@app.command()
def generate(
    ctx: typer.Context,
    repo_path: Optional[Path] = typer.Argument(None, help="Path to Git repository (defaults to the saved one)"),
    tags_per_group: Optional[int] = typer.Option(None, "--tags-per-group", "-t", help="Maximum tags per group"),
    commits_per_tag: Optional[int] = typer.Option(
        None, "--commits-per-tag", "-c", help="0 = commits since previous tag, N = latest N commits"
    ),
    commit_limit: Optional[int] = typer.Option(
        None, "--commit-limit", "-l", help="Commit cap per tag when diffing against the previous tag"
    ),
    groups: Optional[List[str]] = typer.Option(
        None, "--group", "-g", help="Tag prefix to group by (repeatable, replaces the saved list)"
    ),
    refresh_first: bool = typer.Option(False, "--refresh", "-r", help="Refresh tags from the remote first"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="Directory for the HTML report"),
    json_output: Optional[Path] = typer.Option(None, "--json", help="Also write the report model as JSON"),
    no_open: bool = typer.Option(False, "--no-open", help="Do not open the report in a browser"),
) -> None:
    """Generate the tag report and open it in the browser.

    Options override the saved configuration for this run, and the merged
    configuration is saved for the next one.
    """
    app_ctx = _context(ctx)
    overrides = {
        "repository_path": str(repo_path.resolve()) if repo_path is not None else None,
        "tags_per_group": tags_per_group,
        "commits_per_tag": commits_per_tag,
        "commit_limit": commit_limit,
        "group_prefixes": groups or None,
    }
    stored = app_ctx.load_config().model_dump()
    stored.update({key: value for key, value in overrides.items() if value is not None})
    config = ViewerConfig.model_validate(stored)

    if output_dir is not None:
        app_ctx.viewer.output_dir = output_dir
    if no_open:
        app_ctx.viewer.open_browser = False

    console.print(f"[bold green]Generating tag report for:[/bold green] {config.repository_path or '-'}")
    mode = (
        f"commits since previous tag (limit {config.commit_limit})"
        if config.range_mode
        else f"latest {config.commits_per_tag} commits per tag"
    )
    console.print(f"[bold blue]Mode:[/bold blue] {mode}")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task(
            "Refreshing tags and building report..." if refresh_first else "Building report...",
            total=None,
        )
        result = app_ctx.generate(config, refresh=refresh_first, json_output=json_output)
        progress.update(task, completed=True)

    if not result.success:
        console.print(f"[bold red]Error:[/bold red] {result.error}")
        raise typer.Exit(1)

    _print_summary(result.report)
    console.print(f"\n[bold green]✓[/bold green] Report written to {result.report_path}")
    if json_output:
        console.print(f"[bold green]✓[/bold green] Saved JSON to {json_output}")


def _print_summary(report: Report) -> None:
    if not report.groups:
        console.print("[yellow]No tags matched the configured groups[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Group", style="cyan")
    table.add_column("Tags", justify="right", style="green")
    table.add_column("Newest tag", style="white")
    table.add_column("Commits", justify="right", style="yellow")

    for group in report.groups:
        table.add_row(
            group.display_name,
            str(len(group.tags)),
            group.tags[0].name,
            str(sum(len(tag.commits) for tag in group.tags)),
        )

    console.print(table)


@app.command()
def show_config(ctx: typer.Context) -> None:
    """Show the saved configuration."""
    app_ctx = _context(ctx)
    config = app_ctx.load_config()

    console.print(f"\n[bold]Configuration[/bold] [dim]({app_ctx.config_store.config_file})[/dim]")
    console.print(f"[cyan]Repository:[/cyan] {config.repository_path or '-'}")
    console.print(f"[cyan]Tags per group:[/cyan] {config.tags_per_group}")
    console.print(f"[cyan]Commits per tag:[/cyan] {config.commits_per_tag}")
    console.print(f"[cyan]Commit limit:[/cyan] {config.commit_limit}")
    console.print(f"[cyan]Groups:[/cyan] {', '.join(config.group_prefixes) or '-'}")

    try:
        config.validate_for_generation()
    except ConfigurationValidationError as e:
        for problem in e.problems:
            console.print(f"[yellow]⚠ {problem}[/yellow]")


@app.command()
def reset_config(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
) -> None:
    """Delete the saved configuration so defaults apply again."""
    app_ctx = _context(ctx)

    if not force:
        confirm = typer.confirm("Reset the saved configuration to defaults?")
        if not confirm:
            console.print("[yellow]Cancelled[/yellow]")
            return

    if app_ctx.config_store.reset():
        console.print("[bold green]✓[/bold green] Configuration reset")
    else:
        console.print("[yellow]No saved configuration found[/yellow]")


if __name__ == "__main__":
    app()
