"""The navigation state machine driven by the user interface."""

import logging
from typing import List, Optional

from .innertube import InnerTubeClient
from .models import (
    ChannelNode, CommentNode, CommentSectionNode, GameNode, HeaderNode, Item, NoneNode,
    Playback, PlaylistNode, SearchNode, TranscriptNode, VideoNode,
)
from .pages import (
    Category, Comment, CommentSection, Game, Home, Page, Previous, Recommendations, Search,
    Transcript, continue_page, page_title, request,
)
from .resolver import StreamResolver

logger = logging.getLogger(__name__)


class Navigator:
    """Owns the current page, its loaded items and the selection.

    Items are only continued when the selection reaches the last loaded one,
    never ahead of time.
    """

    def __init__(self, api: InnerTubeClient, resolver: StreamResolver):
        self.api = api
        self.resolver = resolver
        self.page: Page = Home()
        self.items: List[Item] = []
        self.selected = 0
        # A message for the user about the last action
        self.notice: Optional[str] = None

    @property
    def title(self) -> str:
        return page_title(self.page)

    @property
    def selected_item(self) -> Optional[Item]:
        if not self.items:
            return None
        return self.items[self.selected]

    def start(self):
        """Load the home page."""
        self._load(0)

    def _load(self, selected: int):
        self.items = request(self.page, self.api)
        self._clamp(selected)

    def _clamp(self, selected: int):
        self.selected = max(0, min(selected, len(self.items) - 1))

    def _push(self, page: Page):
        self.page = page
        self._load(0)

    def _previous(self) -> Previous:
        return Previous(self.page, self.selected)

    # Intents

    def select_delta(self, delta: int):
        """Move the selection by one item, continuing the page at its last item."""
        self.notice = None
        if delta > 0:
            if self.selected + 1 >= len(self.items):
                continue_page(self.page, self.api, self.items)
            self._clamp(self.selected + delta)
        elif delta < 0:
            self._clamp(self.selected + delta)

    def select_page(self, delta: int):
        """Move the selection by a screenful, continuing the page if it would pass the end."""
        self.notice = None
        target = self.selected + delta
        if delta > 0 and target >= len(self.items) - 1:
            continue_page(self.page, self.api, self.items)
        self._clamp(target)

    def activate(self) -> Optional[Playback]:
        """Open the selected item. A video isn't a page: its streams are returned for playing."""
        self.notice = None
        item = self.selected_item
        if item is None:
            return None
        node = item.node

        if isinstance(node, VideoNode):
            return self.resolver.play(node.video_id)
        if isinstance(node, HeaderNode):
            self._push(Category(node.continuation, self._previous()))
        elif isinstance(node, GameNode):
            self._push(Game(node.browse_id, self._previous(), node.params))
        elif isinstance(node, SearchNode):
            self._push(Search(node.query, self._previous(), node.params))
        elif isinstance(node, TranscriptNode):
            self._push(Transcript(node.params, self._previous()))
        elif isinstance(node, CommentSectionNode):
            self._push(CommentSection(node.token, self._previous()))
        elif isinstance(node, CommentNode):
            self._push(Comment(node.token, self._previous()))
        elif isinstance(node, ChannelNode):
            logger.warning(f"Can't open channel {node.browse_id}")
            self.notice = "Opening channels is not supported yet"
        elif isinstance(node, PlaylistNode):
            logger.warning(f"Can't open playlist {node.playlist_id}")
            self.notice = "Opening playlists is not supported yet"
        elif isinstance(node, NoneNode):
            pass
        else:
            raise TypeError(f"Unknown node: {node!r}")
        return None

    def back(self):
        """Return to the previous page, fetched fresh, with its old selection."""
        self.notice = None
        if isinstance(self.page, Home):
            self.selected = 0
            return
        previous = self.page.previous
        self.page = previous.page
        self._load(previous.index)

    def go_home(self):
        self.notice = None
        self._push(Home())

    def search(self, query: str):
        self.notice = None
        if not query:
            return
        self._push(Search(query, self._previous()))

    def refresh(self):
        """Fetch the current page again, keeping the selection where possible."""
        self.notice = None
        self._load(self.selected)

    def show_recommendations(self):
        """Open the watch-next panel of the selected video."""
        self.notice = None
        item = self.selected_item
        if item is not None and isinstance(item.node, VideoNode):
            self._push(Recommendations(item.node.video_id, self._previous()))
