"""Configuration management."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    # Ranked criteria, later ones only break ties of earlier ones
    "video_selector": ["quality:closest:720", "bitrate:lowest"],
    # Lowest bitrate audio by default because most people can't tell the difference
    "audio_selector": ["language:English", "bitrate:lowest"],
    # Case sensitive caption track name, e.g. "English"
    "caption_language": None,
    "video_player": ["mpv", "--audio-file={audio_url}", "{video_url}"],
    "subtitle_args": ["--sub-file={subtitle_url}"],
    # ffplay picks the first (lowest quality) stream, `v` switches to better ones
    "stream_player": ["ffplay", "{hls_manifest_url}"],
    # This may need to be updated at some point
    "client_version": "2.20240101.00.00",
    "hl": None,
    "gl": None,
    "title_alignment": "left",
    "log_file": str(Path.home() / "vidbrowse.log"),
    "log_level": "INFO",
}


class Config:
    """Manages application configuration."""

    def __init__(self, config_file: Optional[Path] = None):
        if config_file is None:
            # Use user's home directory for config
            config_file = Path.home() / "vidbrowse_settings.json"
        self.file = Path(config_file)
        self.data = json.loads(json.dumps(DEFAULTS))
        self.load()

    def load(self):
        """Load configuration from file."""
        if self.file.exists():
            try:
                with open(self.file, 'r', encoding='utf-8') as f:
                    self.data.update(json.load(f))
            except (OSError, ValueError) as e:
                logger.warning(f"Ignoring unreadable settings file {self.file}: {e}")

    def save(self):
        """Save configuration to file."""
        try:
            self.file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.file, 'w', encoding='utf-8') as f:
                json.dump(self.data, f, indent=2)
        except OSError as e:
            logger.warning(f"Couldn't save settings to {self.file}: {e}")

    @property
    def video_selector(self) -> List[str]:
        return list(self.data["video_selector"])

    @property
    def audio_selector(self) -> List[str]:
        return list(self.data["audio_selector"])

    @property
    def caption_language(self) -> Optional[str]:
        return self.data.get("caption_language")

    @property
    def video_player(self) -> List[str]:
        return list(self.data["video_player"])

    @property
    def subtitle_args(self) -> List[str]:
        return list(self.data.get("subtitle_args") or [])

    @property
    def stream_player(self) -> List[str]:
        return list(self.data["stream_player"])

    @property
    def client_version(self) -> str:
        return self.data["client_version"]

    @property
    def hl(self) -> Optional[str]:
        return self.data.get("hl")

    @property
    def gl(self) -> Optional[str]:
        return self.data.get("gl")

    @property
    def title_alignment(self) -> str:
        alignment = str(self.data.get("title_alignment", "left")).lower()
        return alignment if alignment in ("left", "center", "right") else "left"

    @property
    def log_file(self) -> Path:
        """Get the debug log path."""
        return Path(self.data.get("log_file") or DEFAULTS["log_file"]).expanduser()

    @property
    def log_level(self) -> int:
        level = logging.getLevelName(str(self.data.get("log_level", "INFO")).upper())
        return level if isinstance(level, int) else logging.INFO
