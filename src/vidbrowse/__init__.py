"""VidBrowse - browse videos from the terminal and play them in an external player."""

from .version import __version__

__all__ = ["__version__"]
