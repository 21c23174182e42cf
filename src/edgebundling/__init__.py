"""Hierarchical edge bundling: radial cluster layout, category arcs and bundled links."""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("edgebundling")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
