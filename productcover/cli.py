"""Command-line interface for productcover."""

from pathlib import Path

import click
from rich.console import Console

from . import __version__
from .config import ConfigManager, create_default_config_file
from .core.catalog import load_catalogs
from .core.classifier import SignatureDictionary
from .core.pipeline import run_pipeline
from .core.reporting import Reporter
from .errors import CoverError, is_config_error, is_input_error
from .utils.logging_setup import get_logger, setup_logging

logger = get_logger(__name__)

console = Console()
err_console = Console(stderr=True)


def _fail(error: CoverError):
    err_console.print(f"[red]Error: {error.message}[/red]")
    if is_input_error(error):
        err_console.print("[dim]Check the catalog folder and the --pattern glob.[/dim]")
    elif is_config_error(error):
        err_console.print("[dim]Run `productcover config validate` to list every problem.[/dim]")
    raise click.exceptions.Exit(1)


@click.group(name="productcover")
@click.version_option(__version__, prog_name="productcover")
def cli():
    """Find short substrings that identify each product catalog."""
    pass


@cli.command(name="run")
@click.argument("folder", type=click.Path(file_okay=False, path_type=Path))
@click.option("--min-len", type=int, help="Shortest substring length")
@click.option("--max-len", type=int, help="Longest substring length")
@click.option("--non-overlap", is_flag=True,
              help="Forbid substring/superstring pairs in a product's selection")
@click.option("--allow-overlap", is_flag=True,
              help="Allow substring/superstring pairs in a product's selection")
@click.option("--workers", type=int, help="Worker processes for per-catalog stages")
@click.option("--max-candidates", type=int, help="Abort if a catalog yields more candidates")
@click.option("--pattern", help="Glob for catalog files (default: *.txt)")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Path to configuration file")
@click.option("--format", "fmt", type=click.Choice(["table", *Reporter.FORMATS]), default="table",
              show_default=True, help="Output format")
@click.option("--output", "-o", type=click.Path(file_okay=False, path_type=Path),
              help="Directory for report files")
@click.option("--show-parts", is_flag=True, help="List uncovered parts in text output")
@click.option("--verbose", "-v", is_flag=True, help="Report progress")
@click.option("--log-dir", type=click.Path(file_okay=False, path_type=Path),
              help="Also write JSON-lines logs to this directory")
def run_command(folder, min_len, max_len, non_overlap, allow_overlap, workers, max_candidates,
                pattern, config_path, fmt, output, show_parts, verbose, log_dir):
    """Compute exclusive substring dictionaries for every catalog in FOLDER."""
    if non_overlap and allow_overlap:
        raise click.UsageError("--non-overlap and --allow-overlap are mutually exclusive")

    try:
        config = ConfigManager(config_path).load()
        overrides = {
            "min_len": min_len,
            "max_len": max_len,
            "workers": workers,
            "max_candidates": max_candidates,
            "pattern": pattern,
        }
        for key, value in overrides.items():
            if value is not None:
                setattr(config, key, value)
        if non_overlap or allow_overlap:
            config.non_overlap = non_overlap
        if verbose:
            config.verbose = True
        config.validate()

        setup_logging(level="INFO" if config.verbose else "WARNING", log_dir=log_dir)

        catalogs = load_catalogs(folder, config.pattern)
        results = run_pipeline(catalogs, config)
    except CoverError as e:
        logger.debug(f"Run failed: {e.details}")
        _fail(e)

    reporter = Reporter(show_parts=show_parts)
    if fmt == "table":
        reporter.print_table(results, console)
    else:
        click.echo(reporter.render(results, fmt))

    if output:
        formats = [fmt] if fmt in Reporter.FORMATS else ["json"]
        written = reporter.write_reports(results, output, formats)
        for kind, path in written.items():
            err_console.print(f"[green]{kind.upper()} report: {path}[/green]")


@cli.command(name="classify")
@click.argument("report", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("parts", nargs=-1, required=True)
def classify_command(report, parts):
    """Match PARTS against the dictionaries stored in a JSON REPORT."""
    try:
        dictionary = SignatureDictionary.from_json(report)
    except (ValueError, KeyError) as e:
        err_console.print(f"[red]Error: cannot read report {report}: {e}[/red]")
        raise click.exceptions.Exit(1)

    for part in parts:
        hits = dictionary.matches(part)
        if not hits:
            click.echo(f"{part}\t-")
            continue
        described = "; ".join(f"{product} ({', '.join(subs)})" for product, subs in hits.items())
        click.echo(f"{part}\t{described}")


@cli.group(name="config")
def config_group():
    """Manage the run configuration file."""
    pass


@config_group.command(name="init")
@click.option("--path", type=click.Path(dir_okay=False, path_type=Path),
              default=Path(ConfigManager.DEFAULT_CONFIG_FILE), show_default=True,
              help="Path for config file")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def config_init(path, force):
    """Write a configuration file with the default parameters."""
    if path.exists() and not force:
        if not click.confirm(f"Config file {path} already exists. Overwrite?"):
            err_console.print("[yellow]Aborted[/yellow]")
            return

    written = create_default_config_file(path)
    console.print(f"[green]Created config file at {written}[/green]")


@config_group.command(name="show")
@click.option("--path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Path to config file")
def config_show(path):
    """Display the effective configuration."""
    manager = ConfigManager(path, console=console)
    try:
        manager.display(manager.load())
    except CoverError as e:
        _fail(e)


@config_group.command(name="validate")
@click.option("--path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Path to config file")
def config_validate(path):
    """Check the configuration for invalid parameters."""
    try:
        ConfigManager(path).load().validate()
    except CoverError as e:
        err_console.print("[red]Configuration is invalid:[/red]")
        for problem in getattr(e, "problems", [e.message]):
            err_console.print(f"  • {problem}")
        raise click.exceptions.Exit(1)
    console.print("[green]Configuration is valid[/green]")


def main():
    """Main CLI entry point."""
    cli(prog_name="productcover")


if __name__ == "__main__":
    main()
