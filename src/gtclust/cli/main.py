"""
Main CLI entry point for gtclust.

Reads a Newick tree and writes a tab-separated table assigning every
isolate a cluster id at each distance threshold found in the tree.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape

from gtclust import __version__
from gtclust.cli.utils import QuietConsole, setup_logging, spinner_progress
from gtclust.core.exceptions import GtclustError
from gtclust.models.config import ClusterConfig

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="gtclust",
    help="Threshold cluster tables from phylogenetic trees",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        rprint(f"gtclust version {__version__}")
        raise typer.Exit


@app.command()
def main(
    tree: Path = typer.Option(
        ...,
        "--input",
        "-i",
        help="Path to Newick tree",
        exists=True,
        dir_okay=False,
    ),
    output: Path = typer.Option(
        ...,
        "--output",
        "-o",
        help="Output path for cluster table",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML configuration file",
        exists=True,
        dir_okay=False,
    ),
    workers: int | None = typer.Option(
        None,
        "--workers",
        "-w",
        help="Threads used to cluster thresholds concurrently",
        min=1,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress progress output",
    ),
    version: bool = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """
    Cluster the isolates of a phylogenetic tree at every branch-length threshold.

    Unlabelled internal nodes are collapsed into their nearest labelled
    neighbour first. The output has one row per isolate and one column per
    distinct branch length (plus 0); cluster 1 is the largest cluster at
    each threshold.

    Examples:

        gtclust --input tree.nwk --output clusters.tsv

        gtclust -i tree.nwk -o clusters.tsv --workers 4 --verbose
    """
    from gtclust.core.pipeline import run_pipeline

    setup_logging(console, verbose=verbose, quiet=quiet)
    out = QuietConsole(console, quiet=quiet)

    out.print("\n[bold blue]gtclust Threshold Clustering[/bold blue]\n")
    out.print(f"[bold]Tree:[/bold] {escape(str(tree))}")

    try:
        config = ClusterConfig.from_yaml(config_file) if config_file else ClusterConfig()
        config = config.merged(workers=workers)
        logger.debug("Configuration: %s", config)

        with spinner_progress("Collapsing and clustering tree...", console, quiet):
            result = run_pipeline(tree, output, config)

    except GtclustError as e:
        out.console.print(f"\n[red]Error: {escape(e.message)}[/red]")
        if e.suggestion:
            out.console.print(f"[dim]{escape(e.suggestion)}[/dim]")
        if verbose:
            out.console.print_exception()
        raise typer.Exit(code=1) from None
    except PermissionError as e:
        out.console.print(f"\n[red]Permission denied: {escape(str(e))}[/red]")
        out.console.print("[dim]Check file permissions and try again.[/dim]")
        raise typer.Exit(code=1) from None
    except Exception as e:
        out.console.print(f"\n[red]Unexpected error during clustering: {escape(str(e))}[/red]")
        if verbose:
            out.console.print_exception()
        raise typer.Exit(code=1) from None

    out.print(f"[bold]Isolates:[/bold] {len(result.strains):,}")
    out.print(f"[bold]Thresholds:[/bold] {len(result.thresholds):,}")
    out.print("\n[bold green]Clustering complete![/bold green]")
    out.print(f"[bold]Output:[/bold] {escape(str(output))}")
    out.print()


if __name__ == "__main__":
    app()
