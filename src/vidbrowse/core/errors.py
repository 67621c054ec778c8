"""Exception hierarchy for VidBrowse."""

from typing import Optional


class VidBrowseError(Exception):
    """Base class for every error raised by VidBrowse."""


class DecodeError(VidBrowseError):
    """A response did not have the shape the decoders expect."""

    def __init__(self, message: str, path: str = ""):
        self.path = path
        if path:
            message = f"{message} (at {path})"
        super().__init__(message)


class UnavailableError(DecodeError):
    """The platform answered, but the video can't be played (age restricted, removed...)."""

    def __init__(self, reason: Optional[str] = None):
        self.reason = reason
        message = "Couldn't parse response, it may be age restricted"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, "streamingData")


class ExtractionError(VidBrowseError):
    """A text marker used to find the player script or its functions is gone."""


class TransportError(VidBrowseError):
    """A network request failed."""


class SelectionError(VidBrowseError):
    """No format is available for a required stream kind."""


class ScriptError(VidBrowseError):
    """An extracted player function failed to run."""


class PlayerError(VidBrowseError):
    """The external media player could not be started."""


class ConfigError(VidBrowseError):
    """The settings file holds a value that can't be used."""
