"""Decoder for video transcripts."""

from typing import Any, List

from ..models import Item, TranscriptNode
from .base import get, get_list, header, plain, runs, simple, spaced


def decode_transcript(data: Any) -> List[Item]:
    """Other available languages first, then the timed segments."""
    items: List[Item] = []
    for action in get_list(data, "actions"):
        panel = get(action, "updateEngagementPanelAction", "content", "transcriptRenderer",
                    "content", "transcriptSearchPanelRenderer")

        items.append(header(plain("Other languages")))
        languages = get_list(panel, "footer", "transcriptFooterRenderer", "languageMenu",
                             "sortFilterSubMenuRenderer", "subMenuItems")
        for language in languages:
            items.append(Item(
                # The current language is underlined
                [plain(get(language, "title"), underline=bool(language.get("selected")))],
                [],
                TranscriptNode(get(language, "continuation", "reloadContinuationData",
                                   "continuation")),
            ))

        segments = get_list(panel, "body", "transcriptSegmentListRenderer", "initialSegments")
        for segment in segments:
            renderer = get(segment, "transcriptSegmentRenderer")
            items.append(Item(
                spaced(runs(get(renderer, "snippet"))),
                [plain(simple(get(renderer, "startTimeText")))],
            ))
    return items
