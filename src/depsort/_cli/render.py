"""Rich rendering utilities for analysis results."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

if TYPE_CHECKING:
    from rich.console import Console

    from depsort._analysis import Analyzer
    from depsort._node import DependencyNode


def _label(node: DependencyNode) -> str:
    return escape(str(node.value))


def render_order_table(analyzer: Analyzer, console: Console) -> None:
    """Render the ordered output as a table of index, depth and value.

    Args:
        analyzer: Analyzer holding the result to render.
        console: Rich Console to output to.

    """
    result = analyzer.result
    if not result.ordered_nodes:
        console.print("[dim]No nodes to order[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Depth", justify="right", style="yellow")
    table.add_column("Node")

    for node in result.ordered_nodes:
        table.add_row(str(result.index_of(node)), str(result.depth_of(node)), _label(node))

    console.print(table)


def render_levels_tree(analyzer: Analyzer, console: Console) -> None:
    """Render the depth groups as a Rich Tree, one branch per depth.

    Args:
        analyzer: Analyzer holding the result to render.
        console: Rich Console to output to.

    """
    tree = Tree("[bold]Levels[/bold]")
    for depth, group in enumerate(analyzer.depth_group_nodes()):
        branch = tree.add(f"[cyan]Depth {depth}[/cyan] [dim]({len(group)})[/dim]")
        for node in group:
            branch.add(_label(node))
    console.print(tree)


def render_cycle(analyzer: Analyzer, console: Console) -> None:
    """Render the nodes left unresolved by a cyclic run.

    Args:
        analyzer: Analyzer holding the result to render.
        console: Rich Console to output to.

    """
    result = analyzer.result
    console.print(f"[red]✗ Circular dependency: {result.cycle_size} node(s) could not be ordered[/red]")
    for node in result.cycle_nodes:
        console.print(f"  [red]•[/red] {_label(node)}")


def render_summary(analyzer: Analyzer, console: Console, *, title: str) -> None:
    """Render a summary panel of the last run.

    Args:
        analyzer: Analyzer holding the result to render.
        console: Rich Console to output to.
        title: Panel title.

    """
    result = analyzer.result
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Nodes", str(len(analyzer.nodes)))
    table.add_row("Ordered", str(len(result.ordered_nodes)))
    table.add_row("Unresolved", str(result.cycle_size))
    table.add_row("Maximum depth", str(result.maximum_depth))
    table.add_row("Valid", "[green]yes[/green]" if result.valid else "[red]no[/red]")

    console.print(Panel(table, title=f"[bold]{escape(title)}[/bold]", border_style="cyan" if result.valid else "red"))
