"""Main entry point for VidBrowse application."""

import logging
import sys

from .core import (
    InnerTubeClient,
    MediaPlayer,
    Navigator,
    StreamResolver,
    VidBrowseError,
    parse_policy,
)
from .ui import run
from .utils import Config, log_error
from .version import __version__

logger = logging.getLogger(__name__)


def setup_logging(config: Config):
    """Log to a file, curses owns the terminal."""
    config.log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(config.log_file, encoding="utf-8")
        ]
    )


def build_navigator(config: Config) -> Navigator:
    api = InnerTubeClient(config.client_version, config.hl, config.gl)
    resolver = StreamResolver(
        api,
        parse_policy(config.video_selector, "video"),
        parse_policy(config.audio_selector, "audio"),
        config.caption_language,
    )
    return Navigator(api, resolver)


def main():
    """Main entry point."""
    config = Config()
    setup_logging(config)
    try:
        logger.info(f"Starting VidBrowse v{__version__}")
        navigator = build_navigator(config)
        player = MediaPlayer(config.video_player, config.stream_player, config.subtitle_args)
        # The home page is loaded before the terminal switches to curses
        navigator.start()
        run(navigator, player, config.title_alignment)
        logger.info("Application closed normally")
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
    except VidBrowseError as e:
        logger.error(f"Fatal error in main(): {e}", exc_info=True)
        log_error("Fatal error in main()", e)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
