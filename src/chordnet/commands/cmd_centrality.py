"""Rank chords by PageRank and betweenness centrality."""

from __future__ import annotations

import click

from chordnet.commands.resolve import analysis_config, open_graph, output_modes, table
from chordnet.exit_codes import InputError
from chordnet.output.formatter import format_score, json_envelope, to_json


@click.command()
@click.argument("input_path", metavar="FILE", type=click.Path(exists=True, dir_okay=False))
@click.option("--damping", type=float, default=None, help="PageRank damping factor in (0, 1] (default from config: 0.85)")
@click.option("--iterations", type=int, default=None, help="PageRank power iterations (default from config: 100)")
@click.option("--top", default=0, type=click.IntRange(min=0), help="Show only the N highest-ranked chords (0 = all)")
@click.pass_context
def centrality(ctx, input_path, damping, iterations, top):
    """PageRank and betweenness centrality of the chords in FILE.

    PageRank always runs the full iteration count, so results are
    reproducible for a given --iterations value.  Betweenness counts
    directed shortest paths (unweighted) passing through each chord.
    """
    from chordnet.graph.centrality import compute_centrality, rank_nodes

    json_mode, compact = output_modes(ctx)
    cfg = analysis_config(ctx)
    damping = cfg.damping if damping is None else damping
    iterations = cfg.iterations if iterations is None else iterations

    graph = open_graph(input_path)
    try:
        result = compute_centrality(graph, damping=damping, iterations=iterations)
    except ValueError as exc:
        raise InputError(str(exc)) from exc

    ranked = rank_nodes(result.pagerank, top or None)
    brokers = [label for label, score in rank_nodes(result.betweenness) if score > 0]
    if ranked:
        verdict = f"most central chord {ranked[0][0]}, {len(brokers)} chords bridge shortest paths"
    else:
        verdict = "no chords to rank"

    if json_mode:
        click.echo(
            to_json(
                json_envelope(
                    "centrality",
                    summary={
                        "verdict": verdict,
                        "damping": damping,
                        "iterations": iterations,
                        "chords": len(result.pagerank),
                    },
                    chords=[
                        {"label": label, "pagerank": score, "betweenness": result.betweenness[label]}
                        for label, score in ranked
                    ],
                )
            )
        )
        return

    click.echo(f"VERDICT: {verdict}")
    click.echo(f"  damping={damping}  iterations={iterations}\n")
    rows = [
        [label, format_score(score), format_score(result.betweenness[label], 2)]
        for label, score in ranked
    ]
    click.echo(table(["chord", "pagerank", "betweenness"], rows, compact))
