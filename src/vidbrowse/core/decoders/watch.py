"""Decoders for a video's recommendations page (the `next` endpoint)."""

from typing import Any, List, Optional, Tuple

from ..models import (
    CommentSectionNode, Item, Line, Span, Text, TranscriptNode, VideoNode,
)
from .base import (
    append_actions, badge_line, blank, continuation_token, get, get_list, int_to_rgb, label,
    lines_text, only_key, plain, runs, simple, spaced, unknown, view_count,
)


def compact_video(renderer: Any) -> Item:
    lines: Text = [
        runs(get(renderer, "longBylineText")),
        view_count(get(renderer, "shortViewCountText")),
    ]
    # These two are not present on streams
    if "publishedTimeText" in renderer:
        lines.append(plain(simple(renderer["publishedTimeText"])))
    if "lengthText" in renderer:
        lines.append(plain(label(renderer["lengthText"])))
    lines.extend(lines_text([
        badge_line("Badges: ", renderer.get("badges"), "label"),
        badge_line("Owner badges: ", renderer.get("ownerBadges"), "tooltip"),
    ]))
    return Item(spaced(plain(simple(get(renderer, "title")))), lines,
                VideoNode(get(renderer, "videoId")))


def secondary_result(result: Any, items: List[Item], where: str) -> Optional[str]:
    key = only_key(result, ("compactVideoRenderer", "continuationItemRenderer"), where)
    if key == "compactVideoRenderer":
        items.append(compact_video(result[key]))
        return None
    if key == "continuationItemRenderer":
        return continuation_token(result[key])
    raise unknown(result, where)


def styled_description(body: Any) -> Text:
    """Split the description into lines, colouring the runs the platform styles (links)."""
    content = get(body, "content")
    lines: Text = []
    current: Line = []
    index = 0

    def add_plain(section: str):
        nonlocal current
        parts = section.split("\n")
        if parts[0]:
            current.append(Span(parts[0]))
        for part in parts[1:]:
            lines.append(current)
            current = [Span(part)] if part else []

    for style_run in body.get("styleRuns", []):
        start = get(style_run, "startIndex")
        length = get(style_run, "length")
        if start > index:
            add_plain(content[index:start])
        colour = style_run.get("fontColor")
        current.append(Span(
            content[start:start + length],
            fg=int_to_rgb(colour) if colour is not None else None,
        ))
        index = max(index, start + length)
    if index < len(content):
        add_plain(content[index:])
    lines.append(current)
    return lines


def description_panel(content: Any, video_id: str) -> Item:
    title: Text = []
    lines: Text = []
    for item in get_list(content, "structuredDescriptionContentRenderer", "items"):
        if "videoDescriptionHeaderRenderer" in item:
            head = item["videoDescriptionHeaderRenderer"]
            title = spaced(runs(get(head, "title")))
            lines.append(plain(simple(get(head, "channel"))))
            for factoid in head.get("factoid", []):
                lines.append(plain(get(factoid, "factoidRenderer", "accessibilityText")))
        elif "expandableVideoDescriptionBodyRenderer" in item:
            lines.extend(styled_description(get(
                item, "expandableVideoDescriptionBodyRenderer", "attributedDescriptionBodyText")))
    return Item(title or spaced(plain("Video")), lines, VideoNode(video_id))


def comments_panel(panel_header: Any) -> List[Item]:
    renderer = get(panel_header, "engagementPanelTitleHeaderRenderer")
    title = runs(get(renderer, "contextualInfo")) + [Span(" Comments")]
    items = [Item([title])]
    for sub_menu_item in get_list(renderer, "menu", "sortFilterSubMenuRenderer", "subMenuItems"):
        items.append(Item(
            [plain(get(sub_menu_item, "title"))], [],
            CommentSectionNode(get(
                sub_menu_item, "serviceEndpoint", "continuationCommand", "token")),
        ))
    return items


def autoplay(data: Any) -> Item:
    """The 'next up' video."""
    renderer = get(data, "playerOverlays", "playerOverlayRenderer", "autoplay",
                   "playerOverlayAutoplayRenderer")
    lines: Text = [
        plain(simple(get(renderer, "videoTitle"))),
        [],
        runs(get(renderer, "byline")),
        plain(simple(get(renderer, "publishedTimeText"))),
        plain(label(get(renderer, "shortViewCountText"))),
    ]
    # Video length
    for overlay in renderer.get("thumbnailOverlays", []):
        lines.append(plain(label(get(overlay, "thumbnailOverlayTimeStatusRenderer", "text"))))
    return Item(spaced(plain("Autoplay video")), lines, VideoNode(get(renderer, "videoId")))


def decode_next(data: Any) -> Tuple[List[Item], Optional[str]]:
    """Video info, transcript, comment sorts, autoplay and the recommendations."""
    video_id = get(data, "currentVideoEndpoint", "watchEndpoint", "videoId")
    items: List[Item] = []

    for panel in get_list(data, "engagementPanels"):
        renderer = get(panel, "engagementPanelSectionListRenderer")
        content = renderer.get("content", {})
        if "structuredDescriptionContentRenderer" in content:
            items.append(description_panel(content, video_id))
        elif "continuationItemRenderer" in content:
            params = get(content, "continuationItemRenderer", "continuationEndpoint",
                         "getTranscriptEndpoint", "params")
            items.append(Item([plain("Transcript")], [], TranscriptNode(params)))
        elif "engagementPanelTitleHeaderRenderer" in renderer.get("header", {}) \
                and "menu" in renderer["header"]["engagementPanelTitleHeaderRenderer"]:
            items.extend(comments_panel(renderer["header"]))
        # Anything else is ads

    items.append(blank())
    items.append(autoplay(data))

    # Recommendations below the video
    continuation = None
    results = get_list(data, "contents", "twoColumnWatchNextResults", "secondaryResults",
                       "secondaryResults", "results")
    for i, result in enumerate(results):
        token = secondary_result(result, items, f"secondaryResults.results[{i}]")
        if token is not None:
            continuation = token
    return items, continuation


def decode_next_continuation(data: Any, items: List[Item]) -> Optional[str]:
    continuation = None
    for i, result in enumerate(append_actions(data, "onResponseReceivedEndpoints")):
        token = secondary_result(result, items, f"continuationItems[{i}]")
        if token is not None:
            continuation = token
    return continuation
