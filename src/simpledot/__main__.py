"""CLI entry point for simpledot."""

import logging
import sys

import click

from simpledot import ParseConfig, parse
from simpledot.config import MAX_NESTING_DEPTH
from simpledot.errors import DotError
from simpledot.ir.ast import ClusterSubgraph, EdgeDecl, Graph, GraphAttribute, NodeDecl


def _format_attrs(attrs: tuple[GraphAttribute, ...]) -> str:
    if not attrs:
        return ""
    body = ", ".join(f"{a.name.value}={a.value!r}" for a in attrs)
    return f" [{body}]"


def outline(graph: Graph, indent: int = 0) -> list[str]:
    """Render a resolved graph as an indented, human-readable outline."""
    pad = "  " * indent
    lines: list[str] = []
    for attr in graph.attributes:
        lines.append(f"{pad}{attr.name.value} = {attr.value!r}")
    for component in graph.components:
        if isinstance(component, NodeDecl):
            lines.append(f"{pad}node {component.id!r}{_format_attrs(component.attributes)}")
        elif isinstance(component, EdgeDecl):
            op = f" {graph.kind.edge_op} "
            chain = op.join(repr(e) for e in component.endpoints)
            lines.append(f"{pad}edge {chain}{_format_attrs(component.attributes)}")
        else:
            label = "cluster" if isinstance(component, ClusterSubgraph) else "subgraph"
            name = "" if component.name is None else f" {component.name!r}"
            lines.append(f"{pad}{label}{name}")
            lines.extend(outline(component.graph, indent + 1))
    return lines


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option(
    "--max-depth",
    "max_depth",
    type=click.IntRange(1, MAX_NESTING_DEPTH),
    default=64,
    help="Maximum subgraph nesting depth",
)
@click.option("--verbose", "-v", "verbose", is_flag=True, help="Log parser debug output to stderr")
def main(input: str | None, max_depth: int, verbose: bool) -> None:
    """Parse a DOT subset graph and print its resolved structure."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if input:
        try:
            with open(input, encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    try:
        graph = parse(text, ParseConfig(max_nesting_depth=max_depth))
    except DotError as e:
        click.echo(f"parse error:\n{e}", err=True)
        sys.exit(1)

    header = f"{'strict ' if graph.strict else ''}{graph.kind.keyword}"
    if graph.name is not None:
        header += f" {graph.name!r}"
    click.echo(header)
    for line in outline(graph, indent=1):
        click.echo(line)


if __name__ == "__main__":
    main()
