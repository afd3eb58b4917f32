"""chordnet: transition-graph analysis for chord sequences."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("chordnet")
except PackageNotFoundError:
    __version__ = "dev"
