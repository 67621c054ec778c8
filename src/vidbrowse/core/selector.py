"""Ranked selection of audio and video formats."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Union

from .errors import ConfigError, SelectionError
from .models import AdaptiveFormat


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


@dataclass(frozen=True)
class Highest:
    def compare(self, best: int, candidate: int) -> int:
        return _sign(candidate - best)


@dataclass(frozen=True)
class Lowest:
    def compare(self, best: int, candidate: int) -> int:
        return _sign(best - candidate)


@dataclass(frozen=True)
class ClosestTo:
    """Prefers the value nearest to `target`, either side."""
    target: int

    def compare(self, best: int, candidate: int) -> int:
        return _sign(abs(best - self.target) - abs(candidate - self.target))


Selector = Union[Highest, Lowest, ClosestTo]


class MediaFormat(Enum):
    MP4 = "mp4"
    WEBM = "webm"


@dataclass(frozen=True)
class Bitrate:
    selector: Selector


@dataclass(frozen=True)
class Quality:
    """Video height, only meaningful for video formats."""
    selector: Selector


@dataclass(frozen=True)
class Format:
    media_format: MediaFormat


@dataclass(frozen=True)
class Language:
    """Audio track display name, only meaningful for audio formats."""
    name: str


Criterion = Union[Bitrate, Quality, Format, Language]
SelectorPolicy = List[Criterion]


def compare(criterion: Criterion, best: AdaptiveFormat, candidate: AdaptiveFormat) -> int:
    """1 if `candidate` is strictly better than `best` under `criterion`, -1 if worse, 0 if tied."""
    if isinstance(criterion, Bitrate):
        return criterion.selector.compare(best.bitrate, candidate.bitrate)
    if isinstance(criterion, Quality):
        return criterion.selector.compare(best.height or 0, candidate.height or 0)
    if isinstance(criterion, Format):
        wanted = criterion.media_format.value
        return int(wanted in candidate.mime_type) - int(wanted in best.mime_type)
    if isinstance(criterion, Language):
        return (int(candidate.audio_track == criterion.name)
                - int(best.audio_track == criterion.name))
    raise TypeError(f"Unknown selector criterion: {criterion!r}")


def is_better(policy: SelectorPolicy, best: AdaptiveFormat, candidate: AdaptiveFormat) -> bool:
    """The first criterion with a strict preference decides, later ones only break ties."""
    for criterion in policy:
        order = compare(criterion, best, candidate)
        if order:
            return order > 0
    return False


def select_format(formats: Iterable[AdaptiveFormat], policy: SelectorPolicy,
                  kind: str = "matching") -> AdaptiveFormat:
    """Fold over `formats` keeping the best one; on a full tie the first seen is kept."""
    best: Optional[AdaptiveFormat] = None
    for candidate in formats:
        if best is None or is_better(policy, best, candidate):
            best = candidate
    if best is None:
        raise SelectionError(f"No {kind} formats available")
    return best


# Parsing from the settings file

def parse_selector(text: str) -> Selector:
    if text == "highest":
        return Highest()
    if text == "lowest":
        return Lowest()
    if text.startswith("closest:"):
        try:
            return ClosestTo(int(text[len("closest:"):]))
        except ValueError:
            raise ConfigError(f"Invalid target in selector {text!r}") from None
    raise ConfigError(f"Unknown selector {text!r}, expected highest, lowest or closest:<number>")


def parse_criterion(text: str, kind: str) -> Criterion:
    if not isinstance(text, str):
        raise ConfigError(f"Invalid {kind} selector {text!r}")
    name, sep, value = text.partition(":")
    if not sep:
        raise ConfigError(f"Invalid {kind} selector {text!r}")
    if name == "bitrate":
        return Bitrate(parse_selector(value))
    if name == "format":
        try:
            return Format(MediaFormat(value))
        except ValueError:
            raise ConfigError(f"Unknown media format {value!r}, expected mp4 or webm") from None
    if name == "quality" and kind == "video":
        return Quality(parse_selector(value))
    if name == "language" and kind == "audio":
        if not value:
            raise ConfigError("Language selector needs a track name")
        return Language(value)
    raise ConfigError(f"Unknown {kind} selector {text!r}")


def parse_policy(entries: Iterable[str], kind: str) -> SelectorPolicy:
    """Parse the `video_selector` or `audio_selector` setting, `kind` is "video" or "audio"."""
    if isinstance(entries, str):
        raise ConfigError(f"{kind}_selector must be a list of selectors")
    return [parse_criterion(entry, kind) for entry in entries]
