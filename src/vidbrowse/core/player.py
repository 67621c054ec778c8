"""Handing resolved streams to an external media player."""

import logging
import subprocess
from typing import List, Optional, Tuple

from .errors import PlayerError
from .models import LiveStream, Playback, ResolvedStreams

logger = logging.getLogger(__name__)


class MediaPlayer:
    """Runs the configured player programs. Requires them in the system PATH."""

    def __init__(self, video_player: List[str], stream_player: List[str],
                 subtitle_args: Optional[List[str]] = None):
        if not video_player or not stream_player:
            raise PlayerError("Player commands can't be empty")
        self.video_player = video_player
        self.stream_player = stream_player
        self.subtitle_args = subtitle_args or []

    def command(self, playback: Playback) -> Tuple[str, List[str]]:
        """The `(program, args)` for a playback, with the URLs filled into the templates."""
        streams = playback.streams
        if isinstance(streams, LiveStream):
            values = {"hls_manifest_url": streams.hls_manifest_url}
            template = list(self.stream_player)
        elif isinstance(streams, ResolvedStreams):
            values = {
                "video_url": streams.video_url,
                "audio_url": streams.audio_url,
                "subtitle_url": streams.subtitle_url,
            }
            template = list(self.video_player)
            if streams.subtitle_url is not None:
                template += self.subtitle_args
        else:
            raise TypeError(f"Unknown streams: {streams!r}")

        try:
            cmd = [part.format(**values) for part in template]
        except (KeyError, IndexError) as e:
            raise PlayerError(f"Unknown placeholder {e} in player command {template}") from e
        return cmd[0], cmd[1:]

    def play(self, playback: Playback) -> int:
        """Runs the player until it exits, returning its exit status."""
        program, args = self.command(playback)
        logger.info(f"Starting {program} for {playback.summary.title!r}")
        try:
            process = subprocess.run([program, *args])
        except FileNotFoundError:
            raise PlayerError(f"{program} not found. Please install it and add it to your PATH.")

        if process.returncode != 0:
            logger.warning(f"{program} exited with status {process.returncode}")
        return process.returncode
