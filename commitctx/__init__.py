"""Change-context extraction and packing for commit message generation."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("commitctx")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
