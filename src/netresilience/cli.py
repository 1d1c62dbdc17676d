"""CLI entry point for the network resilience engine."""

import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .core.config import Config, get_config, set_config
from .core.exceptions import NetResilienceError
from .core.utils import coerce_node_id, parse_link
from .topology import Graph, load_graph, sample_graph, toggle_edge

console = Console()


def print_error(message: str) -> None:
    """Print error message in red."""
    console.print(f"[red]Error:[/red] {message}")


def print_success(message: str) -> None:
    """Print success message in green."""
    console.print(f"[green]✓[/green] {message}")


def print_warning(message: str) -> None:
    """Print warning message in yellow."""
    console.print(f"[yellow]Warning:[/yellow] {message}")


def topology_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Shared options: topology file and links to fail before running."""
    func = click.option(
        "--fail",
        "failures",
        multiple=True,
        metavar="U-V",
        help="Take a link down before running (repeatable)",
    )(func)
    func = click.option(
        "--topology",
        "-t",
        type=click.Path(exists=True, dir_okay=False),
        help="Topology JSON file (default: built-in sample)",
    )(func)
    return func


def load_topology(topology: str | None, failures: tuple[str, ...]) -> Graph:
    """Load the topology and apply requested link failures."""
    graph = load_graph(topology) if topology else sample_graph()
    known = set(graph.node_ids())

    for spec in failures:
        u, v = parse_link(spec)
        u, v = coerce_node_id(u, known), coerce_node_id(v, known)
        if not any(e.connects(u, v) for e in graph.edges):
            print_warning(f"No link between {u} and {v}, ignoring")
            continue
        graph = toggle_edge(graph, u, v)

    return graph


def _node_arg(graph: Graph, value: str | None) -> Any:
    if value is None:
        return None
    return coerce_node_id(value, set(graph.node_ids()))


def _print_trace(trace: list[str]) -> None:
    console.print(Panel("\n".join(trace) or "(empty)", title="Trace"))


@click.group()
@click.version_option(version=__version__, prog_name="netresilience")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Configuration file (JSON)",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: str | None) -> None:
    """Network resilience toolkit - critical links, shortest paths and recovery planning."""
    ctx.ensure_object(dict)
    if config_path:
        set_config(Config.from_file(Path(config_path)))
    config = get_config()
    config.verbose = verbose or config.verbose

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    ctx.obj["config"] = config


@main.command()
@topology_options
@click.option("--trace", "show_trace", is_flag=True, help="Show the traversal trace")
@click.option("--output", "-o", type=click.Path(), help="Output file (JSON)")
@click.pass_context
def analyze(
    ctx: click.Context,
    topology: str | None,
    failures: tuple[str, ...],
    show_trace: bool,
    output: str | None,
) -> None:
    """Find critical links (bridges) and critical sites (articulation points)."""
    from .analysis import analyze_critical_structures
    from .output import export_json

    try:
        graph = load_topology(topology, failures)
        result = analyze_critical_structures(graph)
    except NetResilienceError as e:
        print_error(str(e))
        sys.exit(1)

    table = Table(title=f"Critical Structures (from {graph.label(result.root)})")
    table.add_column("Type", style="cyan")
    table.add_column("Element", style="yellow")

    for u, v in result.bridges:
        table.add_row("bridge", f"{graph.label(u)} - {graph.label(v)}")
    for node_id in graph.node_ids():
        if node_id in result.articulation_points:
            table.add_row("articulation point", graph.label(node_id))

    if result.bridges or result.articulation_points:
        console.print(table)
    else:
        console.print("[green]No bridges or articulation points found.[/green]")

    if show_trace or ctx.obj["config"].analysis.show_trace:
        _print_trace(result.trace)

    if output:
        export_json(result, output)
        print_success(f"Results saved to {output}")


@main.command()
@click.argument("source")
@click.argument("target")
@topology_options
@click.option("--trace", "show_trace", is_flag=True, help="Show the search trace")
@click.option("--output", "-o", type=click.Path(), help="Output file (JSON)")
@click.pass_context
def path(
    ctx: click.Context,
    source: str,
    target: str,
    topology: str | None,
    failures: tuple[str, ...],
    show_trace: bool,
    output: str | None,
) -> None:
    """Find the minimum-hop route between two sites."""
    from .analysis import find_shortest_path
    from .output import export_json

    try:
        graph = load_topology(topology, failures)
        result = find_shortest_path(graph, _node_arg(graph, source), _node_arg(graph, target))
    except NetResilienceError as e:
        print_error(str(e))
        sys.exit(1)

    if show_trace or ctx.obj["config"].analysis.show_trace:
        _print_trace(result.trace)

    if output:
        export_json(result, output)
        print_success(f"Results saved to {output}")

    if not result.found:
        print_error(
            f"No path exists from {graph.label(result.source)} to {graph.label(result.target)}"
        )
        sys.exit(1)

    route = " → ".join(graph.label(n) for n in result.path)
    console.print(Panel(f"{route}\n\nPath length: {result.hops} hops", title="Shortest Path"))


@main.command()
@topology_options
@click.option("--hub", help="Hub site id (default: first hub in the topology)")
@click.option("--trace", "show_trace", is_flag=True, help="Show the planning trace")
@click.option("--output", "-o", type=click.Path(), help="Output file (JSON)")
@click.pass_context
def recover(
    ctx: click.Context,
    topology: str | None,
    failures: tuple[str, ...],
    hub: str | None,
    show_trace: bool,
    output: str | None,
) -> None:
    """Plan recovery links for sites cut off from the hub."""
    from .analysis import plan_recovery
    from .output import export_json

    config = ctx.obj["config"]
    try:
        graph = load_topology(topology, failures)
        result = plan_recovery(graph, _node_arg(graph, hub or config.analysis.default_hub))
    except NetResilienceError as e:
        print_error(str(e))
        sys.exit(1)

    if not result.needs_recovery:
        print_success(f"All sites reachable from {graph.label(result.hub)}. No recovery needed.")
    else:
        table = Table(title=f"Recovery Plan (hub: {graph.label(result.hub)})")
        table.add_column("Disconnected Site", style="red")
        table.add_column("Reconnect To", style="green")
        for edge in result.recovery_edges:
            table.add_row(graph.label(edge.source), graph.label(edge.target))
        console.print(table)
        console.print(f"Total new link length: {result.total_length:.1f}")

    if show_trace or config.analysis.show_trace:
        _print_trace(result.trace)

    if output:
        export_json(result, output)
        print_success(f"Results saved to {output}")


@main.command()
@topology_options
@click.option("--output", "-o", type=click.Path(), help="Output file (JSON)")
def metrics(topology: str | None, failures: tuple[str, ...], output: str | None) -> None:
    """Show topology metrics over links that are up."""
    from .output import export_json
    from .topology import calculate_metrics

    try:
        graph = load_topology(topology, failures)
    except NetResilienceError as e:
        print_error(str(e))
        sys.exit(1)

    result = calculate_metrics(graph)
    console.print(Panel(str(result), title="Topology Metrics"))

    if output:
        export_json(result, output)
        print_success(f"Results saved to {output}")


@main.command()
@topology_options
@click.option("--output", "-o", type=click.Path(), required=True, help="Output file (CSV)")
def export(topology: str | None, failures: tuple[str, ...], output: str) -> None:
    """Export the link table with failure and bridge flags as CSV."""
    from .analysis import analyze_critical_structures
    from .output import export_csv, link_rows

    try:
        graph = load_topology(topology, failures)
        rows = link_rows(graph, analyze_critical_structures(graph))
    except NetResilienceError as e:
        print_error(str(e))
        sys.exit(1)

    export_csv(rows, output)
    print_success(f"{len(rows)} links saved to {output}")


@main.command()
@topology_options
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["html", "md", "json"]),
    help="Report format",
)
@click.option("--hub", help="Hub site id for recovery planning")
@click.option("--trace", "show_trace", is_flag=True, help="Include the analysis trace")
@click.option("--output", "-o", type=click.Path(), help="Output file")
@click.pass_context
def report(
    ctx: click.Context,
    topology: str | None,
    failures: tuple[str, ...],
    output_format: str | None,
    hub: str | None,
    show_trace: bool,
    output: str | None,
) -> None:
    """Generate a resilience report."""
    from .output import generate_report

    config = ctx.obj["config"]
    output_format = output_format or config.report.default_format

    console.print(f"[bold]Generating {output_format.upper()} resilience report...[/bold]")

    try:
        graph = load_topology(topology, failures)
        report_path = generate_report(
            graph,
            output_format=output_format,
            output_file=output,
            hub_id=_node_arg(graph, hub or config.analysis.default_hub),
            include_trace=show_trace,
        )
    except NetResilienceError as e:
        print_error(str(e))
        sys.exit(1)

    print_success(f"Report saved to {report_path}")


@main.command()
@click.option("--output", "-o", type=click.Path(), required=True, help="Output file (JSON)")
def sample(output: str) -> None:
    """Write the built-in sample topology to a JSON file."""
    from .topology import save_graph

    try:
        path = save_graph(sample_graph(), output)
    except NetResilienceError as e:
        print_error(str(e))
        sys.exit(1)

    print_success(f"Sample topology saved to {path}")


if __name__ == "__main__":
    main()
