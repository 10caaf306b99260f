"""kvstart - Start script renderer for TiKV store members."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("kvstart")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"  # Fallback when running from a source checkout
