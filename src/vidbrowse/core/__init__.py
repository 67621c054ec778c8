"""Core functionality for VidBrowse."""

from .errors import (
    VidBrowseError,
    DecodeError,
    UnavailableError,
    ExtractionError,
    TransportError,
    SelectionError,
    ScriptError,
    PlayerError,
    ConfigError,
)
from .innertube import InnerTubeClient
from .navigator import Navigator
from .player import MediaPlayer
from .resolver import StreamResolver, resolve, summary_text
from .selector import parse_policy, select_format

__all__ = [
    "VidBrowseError",
    "DecodeError",
    "UnavailableError",
    "ExtractionError",
    "TransportError",
    "SelectionError",
    "ScriptError",
    "PlayerError",
    "ConfigError",
    "InnerTubeClient",
    "Navigator",
    "MediaPlayer",
    "StreamResolver",
    "resolve",
    "summary_text",
    "parse_policy",
    "select_format",
]
