"""List recurring chord cycles."""

from __future__ import annotations

import click

from chordnet.commands.resolve import analysis_config, open_graph, output_modes, table
from chordnet.output.formatter import json_envelope, to_json


@click.command()
@click.argument("input_path", metavar="FILE", type=click.Path(exists=True, dir_okay=False))
@click.option("--max-length", type=int, default=None, help="Longest cycle to report (default from config: 6)")
@click.pass_context
def cycles(ctx, input_path, max_length):
    """Simple directed chord cycles in FILE, e.g. I -> IV -> V -> I.

    Each cycle is printed once, starting at its alphabetically first
    chord.  Self-transitions are ignored; --max-length below 2 reports
    nothing.
    """
    from chordnet.graph.cycles import find_cycles

    json_mode, compact = output_modes(ctx)
    cfg = analysis_config(ctx)
    max_length = cfg.max_cycle_length if max_length is None else max_length

    graph = open_graph(input_path)
    found = find_cycles(graph, max_length=max_length)
    by_length: dict[int, int] = {}
    for cycle in found:
        by_length[len(cycle)] = by_length.get(len(cycle), 0) + 1

    verdict = f"{len(found)} cycles up to length {max_length}"
    if json_mode:
        click.echo(
            to_json(
                json_envelope(
                    "cycles",
                    summary={
                        "verdict": verdict,
                        "count": len(found),
                        "max_length": max_length,
                        "by_length": {str(k): v for k, v in sorted(by_length.items())},
                    },
                    cycles=[list(cycle) for cycle in found],
                )
            )
        )
        return

    click.echo(f"VERDICT: {verdict}\n")
    rows = [[len(cycle), " -> ".join(cycle + cycle[:1])] for cycle in found]
    click.echo(table(["length", "cycle"], rows, compact))
