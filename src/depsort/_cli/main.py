import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from depsort._analysis import Analyzer, AnalyzerKind, create_analyzer
from depsort._errors import DependencyError
from depsort._io import build_dependency_map, export_report_to_toml, load_graph_document

from .config import ConfigError, DepsortConfig, get_config
from .render import render_cycle, render_levels_tree, render_order_table, render_summary

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

GraphArgument = Annotated[
    Path | None,
    typer.Argument(help="Path to a TOML graph file (defaults to the configured graph)"),
]
StrategyOption = Annotated[
    AnalyzerKind | None,
    typer.Option("-s", "--strategy", help="Analysis strategy (defaults to the configured strategy, then levels)"),
]
OutputOption = Annotated[
    Path | None,
    typer.Option("-o", "--output", help="Write a TOML report to this path"),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Order interdependent items and detect circular dependencies."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> DepsortConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _run_analysis(
    graph: Path | None,
    strategy: AnalyzerKind | None,
    output: Path | None,
) -> tuple[Analyzer, Path | None]:
    """Resolve CLI arguments against the config, then analyze the graph file.

    Returns:
        The analyzer after its run, and the report path to write (if any).

    """
    config = _load_config()

    graph_path = graph or config.graph
    if graph_path is None:
        err_console.print("[red]Error: No graph file given and none configured in pyproject.toml[/red]")
        raise typer.Exit(code=1)

    kind = strategy or config.strategy or AnalyzerKind.LEVELS
    logger.debug(f"Using strategy '{kind}'")

    err_console.print(f"[cyan]Loading graph from:[/cyan] {escape(str(graph_path))}")
    try:
        document = load_graph_document(graph_path)
        nodes = build_dependency_map(document).dependency_nodes()
    except DependencyError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    analyzer = create_analyzer(kind)
    analyzer.analyze(nodes)
    return analyzer, output or config.output


def _finish(analyzer: Analyzer, report_path: Path | None) -> None:
    if report_path is not None:
        err_console.print(f"[cyan]Writing report to:[/cyan] {escape(str(report_path))}")
        report_path.parent.mkdir(parents=True, exist_ok=True)
        export_report_to_toml(analyzer, report_path)

    if analyzer.is_cyclic():
        render_cycle(analyzer, err_console)
        raise typer.Exit(code=1)


@app.command()
def order(
    graph: GraphArgument = None,
    *,
    strategy: StrategyOption = None,
    output: OutputOption = None,
) -> None:
    """Print the nodes so that every node follows its dependencies."""
    analyzer, report_path = _run_analysis(graph, strategy, output)
    render_order_table(analyzer, out_console)
    _finish(analyzer, report_path)


@app.command()
def levels(
    graph: GraphArgument = None,
    *,
    strategy: StrategyOption = None,
    output: OutputOption = None,
) -> None:
    """Print the nodes grouped by depth; each level only depends on lower ones."""
    analyzer, report_path = _run_analysis(graph, strategy, output)
    render_levels_tree(analyzer, out_console)
    _finish(analyzer, report_path)


@app.command()
def check(
    graph: GraphArgument = None,
    *,
    strategy: StrategyOption = None,
) -> None:
    """Check that a graph file has no circular dependency."""
    analyzer, _ = _run_analysis(graph, strategy, None)
    title = str(graph) if graph is not None else "Graph"
    render_summary(analyzer, err_console, title=title)

    if analyzer.is_cyclic():
        render_cycle(analyzer, err_console)
        raise typer.Exit(code=1)

    err_console.print("[green]✓ No circular dependencies[/green]")


def main() -> None:
    app()
