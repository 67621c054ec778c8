"""Data models for pages, items and media formats."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

RGB = Tuple[int, int, int]


@dataclass
class Span:
    """A run of text sharing one style."""
    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False
    crossed_out: bool = False
    fg: Optional[RGB] = None
    bg: Optional[RGB] = None


Line = List[Span]
Text = List[Line]


# Nodes: what happens when the user activates an item

@dataclass(frozen=True)
class HeaderNode:
    """A tag on the home page, opens a category."""
    continuation: str


@dataclass(frozen=True)
class VideoNode:
    video_id: str


@dataclass(frozen=True)
class GameNode:
    browse_id: str
    params: Optional[str] = None


@dataclass(frozen=True)
class SearchNode:
    query: str
    params: Optional[str] = None


@dataclass(frozen=True)
class ChannelNode:
    browse_id: str
    params: Optional[str] = None


@dataclass(frozen=True)
class PlaylistNode:
    playlist_id: str


@dataclass(frozen=True)
class TranscriptNode:
    params: str


@dataclass(frozen=True)
class CommentSectionNode:
    """A video's comments, `token` loads the first page."""
    token: str


@dataclass(frozen=True)
class CommentNode:
    """A comment with replies, `token` loads the first replies."""
    token: str


@dataclass(frozen=True)
class NoneNode:
    """Can be hovered over, but does nothing."""


Node = Union[
    HeaderNode,
    VideoNode,
    GameNode,
    SearchNode,
    ChannelNode,
    PlaylistNode,
    TranscriptNode,
    CommentSectionNode,
    CommentNode,
    NoneNode,
]

NONE = NoneNode()


@dataclass
class Item:
    """One row of the list, with the text shown beside it when selected."""
    title: Text
    detail: Text = field(default_factory=list)
    node: Node = NONE


# Streams

@dataclass
class AdaptiveFormat:
    """One audio or video representation from a player response."""
    is_video: bool
    bitrate: int
    mime_type: str
    url: Optional[str] = None
    signature_cipher: Optional[str] = None
    height: Optional[int] = None
    audio_track: Optional[str] = None


@dataclass
class CaptionTrack:
    name: str
    base_url: str


@dataclass
class VideoSummary:
    """Details printed before a video starts playing."""
    title: str
    description: Optional[str]
    length_seconds: int
    is_family_safe: bool
    is_unlisted: bool
    view_count: str
    category: str
    owner_channel_name: str
    upload_date: str


@dataclass
class PlayerResponse:
    """The parts of a player response needed to play a video."""
    video_id: str
    summary: VideoSummary
    formats: List[AdaptiveFormat] = field(default_factory=list)
    hls_manifest_url: Optional[str] = None
    captions: List[CaptionTrack] = field(default_factory=list)

    @property
    def is_live(self) -> bool:
        return self.hls_manifest_url is not None


@dataclass
class ResolvedStreams:
    """Playable URLs for an on-demand video."""
    video_url: str
    audio_url: str
    subtitle_url: Optional[str] = None


@dataclass
class LiveStream:
    hls_manifest_url: str


@dataclass
class Playback:
    """Everything needed to hand a video to the external player."""
    summary: VideoSummary
    streams: Union[ResolvedStreams, LiveStream]
