"""Turning a video id into playable stream URLs."""

import logging
from typing import Dict, Optional, Union

from .cipher import ScriptEngine, decipher_signature, find_player_path, load_engine, solve_n_challenge
from .decoders import decode_player
from .decoders.base import extract_json
from .errors import DecodeError, ExtractionError, UnavailableError
from .innertube import InnerTubeClient
from .models import AdaptiveFormat, LiveStream, Playback, PlayerResponse, ResolvedStreams, VideoSummary
from .selector import SelectorPolicy, select_format

logger = logging.getLogger(__name__)

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
MONTH = 365 // 12 * DAY
YEAR = 365 * DAY


def seconds_to_human(seconds: int) -> str:
    """Formats a number of seconds in its largest whole unit, e.g. `3 Minutes`."""
    if seconds < MINUTE:
        return f"{seconds} Seconds"
    if seconds < HOUR:
        return f"{seconds // MINUTE} Minutes"
    if seconds < DAY:
        return f"{seconds // HOUR} Hours"
    if seconds < MONTH:
        return f"{seconds // DAY} Days"
    if seconds < YEAR:
        return f"{seconds // MONTH} Months"
    return f"{seconds // YEAR} Years"


def summary_text(summary: VideoSummary) -> str:
    """The video details printed before the player starts."""
    lines = [f"Title: {summary.title}"]
    if summary.description is not None:
        lines.append(f"Description: {summary.description}")
    lines += [
        "",
        f"Length: {seconds_to_human(summary.length_seconds)}",
        "Family friendly" if summary.is_family_safe else "Not family friendly",
        "Unlisted" if summary.is_unlisted else "Not unlisted",
        f"Views: {summary.view_count}",
        f"Category: {summary.category}",
        f"Uploader: {summary.owner_channel_name}",
        f"Uploaded: {summary.upload_date}",
    ]
    return "\n".join(lines)


def stream_url(adaptive_format: AdaptiveFormat, engine: ScriptEngine,
               n_cache: Dict[str, str]) -> str:
    if adaptive_format.url is not None:
        url = adaptive_format.url
    else:
        url = decipher_signature(adaptive_format.signature_cipher, engine)
    return solve_n_challenge(url, engine, n_cache)


def caption_url(player: PlayerResponse, language: Optional[str]) -> Optional[str]:
    if language is None:
        return None
    for track in player.captions:
        if track.name == language:
            return track.base_url
    logger.debug(f"No {language} captions for {player.video_id}")
    return None


def resolve(player: PlayerResponse, video_policy: SelectorPolicy, audio_policy: SelectorPolicy,
            engine: ScriptEngine, caption_language: Optional[str] = None
            ) -> Union[ResolvedStreams, LiveStream]:
    """Pick the best video and audio formats and descramble their URLs.

    Live streams only have a manifest, the player chooses the quality itself.
    """
    if player.is_live:
        return LiveStream(player.hls_manifest_url)

    video = select_format((f for f in player.formats if f.is_video), video_policy, "video")
    audio = select_format((f for f in player.formats if not f.is_video), audio_policy, "audio")
    logger.debug(f"Selected video {video.mime_type} {video.height}p {video.bitrate}bps, "
                 f"audio {audio.mime_type} {audio.audio_track} {audio.bitrate}bps")

    # Every format of one video shares the same n token
    n_cache: Dict[str, str] = {}
    return ResolvedStreams(
        video_url=stream_url(video, engine, n_cache),
        audio_url=stream_url(audio, engine, n_cache),
        subtitle_url=caption_url(player, caption_language),
    )


class StreamResolver:
    """Resolves videos for a whole session, keeping the player functions once loaded."""

    def __init__(self, api: InnerTubeClient, video_policy: SelectorPolicy,
                 audio_policy: SelectorPolicy, caption_language: Optional[str] = None):
        self.api = api
        self.video_policy = video_policy
        self.audio_policy = audio_policy
        self.caption_language = caption_language
        self.engine: Optional[ScriptEngine] = None

    def player_response(self, video_id: str) -> PlayerResponse:
        if self.engine is not None:
            return decode_player(self.api.player(video_id))

        # First video: the watch page gives both the player script and the response
        logger.info(f"Loading player script from the watch page of {video_id}")
        page = self.api.watch_page(video_id)
        self.engine = load_engine(self.api.player_script(find_player_path(page)))
        try:
            data = extract_json(page, '{"re', '};', 1)
        except (ExtractionError, DecodeError) as e:
            raise UnavailableError(str(e)) from e
        return decode_player(data)

    def play(self, video_id: str) -> Playback:
        player = self.player_response(video_id)
        streams = resolve(player, self.video_policy, self.audio_policy, self.engine,
                          self.caption_language)
        return Playback(player.summary, streams)
