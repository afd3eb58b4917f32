"""Click CLI entry point with lazy-loaded subcommands."""

import logging

import click

from chordnet.exit_codes import DESCRIPTIONS

# Lazy-loading command group: imports command modules only when invoked.
# This avoids importing networkx on every CLI call.
_COMMANDS = {
    "build":       ("chordnet.commands.cmd_build",       "build"),
    "transitions": ("chordnet.commands.cmd_transitions", "transitions"),
    "centrality":  ("chordnet.commands.cmd_centrality",  "centrality"),
    "communities": ("chordnet.commands.cmd_communities", "communities"),
    "cycles":      ("chordnet.commands.cmd_cycles",      "cycles"),
    "compare":     ("chordnet.commands.cmd_compare",     "compare"),
}


class LazyGroup(click.Group):
    """A Click group that lazy-loads command modules on first access."""

    def list_commands(self, ctx):
        return sorted(_COMMANDS.keys())

    def get_command(self, ctx, cmd_name):
        if cmd_name not in _COMMANDS:
            return None
        module_path, attr_name = _COMMANDS[cmd_name]
        import importlib
        mod = importlib.import_module(module_path)
        return getattr(mod, attr_name)


def _exit_code_epilog() -> str:
    # \b keeps click from rewrapping the table.
    lines = ["\b", "Exit codes:"]
    lines += [f"  {code}  {text}" for code, text in sorted(DESCRIPTIONS.items())]
    return "\n".join(lines)


def _configure_logging(verbose: int) -> None:
    if not verbose:
        return
    level = logging.DEBUG if verbose > 1 else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@click.group(cls=LazyGroup, epilog=_exit_code_epilog())
@click.version_option(package_name="chordnet")
@click.option('--json', 'json_mode', is_flag=True, help='Output in JSON format')
@click.option('--compact', is_flag=True, help='Compact output: TSV tables, minimal JSON envelope')
@click.option('-v', '--verbose', count=True, help='Log progress to stderr (-vv for debug detail)')
@click.pass_context
def cli(ctx, json_mode, compact, verbose):
    """chordnet: chord transition graph analysis."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj['json'] = json_mode
    ctx.obj['compact'] = compact
