"""Decoders turning InnerTube JSON into list items and continuation tokens."""

from .comments import decode_comments, decode_replies
from .feed import decode_browse, decode_grid_continuation, decode_home_page
from .player import decode_player
from .search import decode_search, decode_search_continuation
from .transcript import decode_transcript
from .watch import decode_next, decode_next_continuation

__all__ = [
    "decode_browse",
    "decode_comments",
    "decode_grid_continuation",
    "decode_home_page",
    "decode_next",
    "decode_next_continuation",
    "decode_player",
    "decode_replies",
    "decode_search",
    "decode_search_continuation",
    "decode_transcript",
]
