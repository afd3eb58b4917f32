"""Compare two chord transition graphs."""

from __future__ import annotations

import click

from chordnet.commands.resolve import open_graph, output_modes
from chordnet.output.formatter import format_score, json_envelope, to_json


@click.command()
@click.argument("path_a", metavar="FILE_A", type=click.Path(exists=True, dir_okay=False))
@click.argument("path_b", metavar="FILE_B", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def compare(ctx, path_a, path_b):
    """Similarity of the transition graphs of FILE_A and FILE_B.

    Reports Jaccard overlap of chords and of transitions, and cosine
    similarity of transition counts.  All three lie in [0, 1].
    """
    from chordnet.graph.compare import compare_graphs

    json_mode, compact = output_modes(ctx)
    result = compare_graphs(open_graph(path_a), open_graph(path_b))

    verdict = (
        f"chords {result.jaccard_nodes:.0%} shared, transitions {result.jaccard_edges:.0%} shared, "
        f"cosine {result.cosine:.2f}"
    )
    if json_mode:
        click.echo(
            to_json(
                json_envelope(
                    "compare",
                    summary={
                        "verdict": verdict,
                        "jaccard_nodes": result.jaccard_nodes,
                        "jaccard_edges": result.jaccard_edges,
                        "cosine": result.cosine,
                    },
                    a=path_a,
                    b=path_b,
                )
            )
        )
        return

    if compact:
        click.echo(
            f"compare  nodes={format_score(result.jaccard_nodes)}  "
            f"edges={format_score(result.jaccard_edges)}  cosine={format_score(result.cosine)}"
        )
        return

    click.echo(f"VERDICT: {verdict}")
    click.echo(f"  jaccard_nodes  {format_score(result.jaccard_nodes)}")
    click.echo(f"  jaccard_edges  {format_score(result.jaccard_edges)}")
    click.echo(f"  cosine         {format_score(result.cosine)}")
