"""Show outgoing transition probabilities per chord."""

from __future__ import annotations

import click

from chordnet.commands.resolve import open_graph, output_modes, table
from chordnet.output.formatter import format_score, json_envelope, to_json


@click.command()
@click.argument("input_path", metavar="FILE", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def transitions(ctx, input_path):
    """Outgoing transition probabilities for every chord in FILE.

    Chords with no outgoing transition (the last chord of a sequence that
    never recurs) are listed with no successors.
    """
    from chordnet.graph.transitions import transition_probabilities

    json_mode, compact = output_modes(ctx)
    graph = open_graph(input_path)
    probs = transition_probabilities(graph)
    terminal = [label for label, row in probs.items() if not row]

    verdict = f"{len(probs)} chords, {len(terminal)} without successors"
    if json_mode:
        click.echo(
            to_json(
                json_envelope(
                    "transitions",
                    summary={"verdict": verdict, "chords": len(probs), "terminal": terminal},
                    transitions={label: dict(row) for label, row in probs.items()},
                )
            )
        )
        return

    click.echo(f"VERDICT: {verdict}\n")
    rows = []
    for label, row in probs.items():
        if not row:
            rows.append([label, "-", ""])
        for target, p in sorted(row.items(), key=lambda item: (-item[1], item[0])):
            rows.append([label, target, format_score(p, 3)])
    click.echo(table(["from", "to", "probability"], rows, compact))
