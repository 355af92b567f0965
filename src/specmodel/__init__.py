"""specmodel - builds validated specification object models from class syntax trees."""

from ._version import get_version
from .core import build_spec, ir, parse_batch, parse_files

__version__ = get_version()

__all__ = ["__version__", "build_spec", "ir", "parse_batch", "parse_files"]
