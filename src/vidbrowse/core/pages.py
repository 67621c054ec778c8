"""Pages: what the user is looking at, and how to fetch it.

Every page except `Home` owns the page it was opened from, so the pages form a
singly linked back stack ending at `Home`. A page only stores what it needs to
fetch itself again plus the token for its next batch of items; the items are
never cached and are fetched fresh whenever a page is shown.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from .decoders import (
    decode_browse, decode_comments, decode_grid_continuation, decode_home_page, decode_next,
    decode_next_continuation, decode_replies, decode_search, decode_search_continuation,
    decode_transcript,
)
from .innertube import InnerTubeClient
from .models import Item

logger = logging.getLogger(__name__)


@dataclass
class Previous:
    """The page to go back to, and which of its items was selected."""
    page: "Page"
    index: int


@dataclass
class Home:
    continuation: Optional[str] = None


@dataclass
class Category:
    """A tag from the top of the home page."""
    token: str
    previous: Previous
    continuation: Optional[str] = None


@dataclass
class Game:
    browse_id: str
    previous: Previous
    params: Optional[str] = None
    continuation: Optional[str] = None


@dataclass
class Search:
    query: str
    previous: Previous
    params: Optional[str] = None
    continuation: Optional[str] = None


@dataclass
class Recommendations:
    """The watch-next panel of a video: description, comments and related videos."""
    video_id: str
    previous: Previous
    continuation: Optional[str] = None


@dataclass
class Transcript:
    params: str
    previous: Previous
    continuation: Optional[str] = None


@dataclass
class CommentSection:
    first_continuation: str
    previous: Previous
    continuation: Optional[str] = None


@dataclass
class Comment:
    """A comment's replies."""
    first_continuation: str
    previous: Previous
    continuation: Optional[str] = None


Page = Union[Home, Category, Game, Search, Recommendations, Transcript, CommentSection, Comment]


def page_title(page: Page) -> str:
    if isinstance(page, Home):
        return "Home"
    if isinstance(page, Category):
        return "A category"
    if isinstance(page, Game):
        return "A game"
    if isinstance(page, Search):
        return page.query
    if isinstance(page, Recommendations):
        return "Recommendations"
    if isinstance(page, Transcript):
        return "Transcript"
    if isinstance(page, CommentSection):
        return "Comments"
    if isinstance(page, Comment):
        return "A comment"
    raise TypeError(f"Unknown page: {page!r}")


def request(page: Page, api: InnerTubeClient) -> List[Item]:
    """Fetch the first batch of a page's items, replacing its continuation token."""
    logger.debug(f"Requesting {type(page).__name__} page")
    if isinstance(page, Home):
        items, page.continuation = decode_home_page(api.home_page())
    elif isinstance(page, Category):
        # Categories are a single batch, the stored token is the one that opens them
        items = []
        decode_grid_continuation(api.browse(continuation=page.token), items)
    elif isinstance(page, Game):
        items, page.continuation = decode_browse(api.browse(browse_id=page.browse_id,
                                                            params=page.params))
    elif isinstance(page, Search):
        items, page.continuation = decode_search(api.search(page.query, page.params))
    elif isinstance(page, Recommendations):
        items, page.continuation = decode_next(api.next(page.video_id))
    elif isinstance(page, Transcript):
        items = decode_transcript(api.transcript(page.params))
    elif isinstance(page, CommentSection):
        items = []
        page.continuation = decode_comments(api.next_continuation(page.first_continuation), items)
    elif isinstance(page, Comment):
        items = []
        page.continuation = decode_replies(api.next_continuation(page.first_continuation), items)
    else:
        raise TypeError(f"Unknown page: {page!r}")
    logger.debug(f"Got {len(items)} items, continuation: {page.continuation is not None}")
    return items


def continue_page(page: Page, api: InnerTubeClient, items: List[Item]) -> None:
    """Append the next batch of a page's items to `items`.

    Does nothing once the page has no continuation token left.
    """
    token = page.continuation
    if token is None:
        return
    logger.debug(f"Continuing {type(page).__name__} page")
    if isinstance(page, (Home, Game)):
        page.continuation = decode_grid_continuation(api.browse(continuation=token), items)
    elif isinstance(page, Search):
        page.continuation = decode_search_continuation(api.search_continuation(token), items)
    elif isinstance(page, Recommendations):
        page.continuation = decode_next_continuation(
            api.next_continuation(token, visitor=True), items)
    elif isinstance(page, CommentSection):
        page.continuation = decode_comments(api.next_continuation(token), items)
    elif isinstance(page, Comment):
        page.continuation = decode_replies(api.next_continuation(token), items)
    elif isinstance(page, (Category, Transcript)):
        # Single batch pages
        page.continuation = None
    else:
        raise TypeError(f"Unknown page: {page!r}")
