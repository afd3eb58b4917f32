"""Build a chord transition graph and summarise it."""

from __future__ import annotations

import json as _json
from pathlib import Path

import click

from chordnet.commands.resolve import open_graph, output_modes, table
from chordnet.output.formatter import json_envelope, section, to_json


@click.command()
@click.argument("input_path", metavar="FILE", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--export",
    "export_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the graph as JSON (reloadable by every command)",
)
@click.option("--top", default=0, type=click.IntRange(min=0), help="Max table rows (0 = all)")
@click.pass_context
def build(ctx, input_path, export_path, top):
    """Build the transition graph for a chord sequence.

    FILE is a JSON chord list, a {"chords": [...]} object, a .txt file of
    whitespace-separated labels, or a graph previously written by --export.
    """
    from chordnet.graph.builder import graph_summary, graph_to_dict

    json_mode, compact = output_modes(ctx)
    graph = open_graph(input_path)
    stats = graph_summary(graph)
    data = graph_to_dict(graph)

    if export_path:
        Path(export_path).write_text(_json.dumps(data, indent=2) + "\n", encoding="utf-8")
        if not json_mode:
            click.echo(f"Graph written to {export_path}")

    verdict = (
        f"{stats['nodes']} chords, {stats['edges']} distinct transitions, "
        f"{stats['tangled_components']} tangled components"
    )

    if json_mode:
        click.echo(to_json(json_envelope("build", summary={"verdict": verdict, **stats}, graph=data)))
        return

    click.echo(f"VERDICT: {verdict}")
    click.echo(
        f"  transitions={stats['transitions']}  self_loops={stats['self_loops']}  "
        f"density={stats['density']}  largest_component={stats['largest_component']}"
    )
    node_rows = [[n["label"], n["root"], n["quality"], n["count"]] for n in data["nodes"]]
    edge_rows = [[e["from"], e["to"], e["weight"]] for e in data["edges"]]
    click.echo("")
    click.echo(section("NODES:", [table(["label", "root", "quality", "count"], node_rows, compact, top)]))
    click.echo("")
    click.echo(section("EDGES:", [table(["from", "to", "weight"], edge_rows, compact, top)]))
