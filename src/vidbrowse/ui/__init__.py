"""User interface components for VidBrowse."""

from .terminal import TerminalUI, run

__all__ = ["TerminalUI", "run"]
