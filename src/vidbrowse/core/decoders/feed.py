"""Decoders for the home page, categories and game pages (the rich grid family)."""

import logging
from typing import Any, List, Optional, Tuple

from ..errors import ExtractionError
from ..models import (
    NONE, GameNode, HeaderNode, Item, SearchNode, Text, VideoNode,
)
from .base import (
    any_text, append_actions, badge_line, blank, continuation_token, extract_json, get,
    get_list, header, label, lines_text, only_key, opt, plain, runs, simple, spaced,
    unknown, view_count,
)

logger = logging.getLogger(__name__)

INITIAL_DATA_START = "var ytInitialData = "
INITIAL_DATA_END = ";</script>"


def video_renderer(renderer: Any) -> Item:
    """A `videoRenderer`, as found in feeds and search results."""
    lines: Text = [
        runs(get(renderer, "ownerText")),
        [],
        view_count(get(renderer, "shortViewCountText")),
        [],
    ]
    # Description, length and upload date aren't available for streams
    snippet = renderer.get("descriptionSnippet")
    if snippet is not None:
        lines.extend([runs(snippet), []])
    for snippet in renderer.get("detailedMetadataSnippets") or []:
        lines.extend([runs(get(snippet, "snippetText")), []])
    if "lengthText" in renderer:
        lines.append(plain(label(renderer["lengthText"])))
    if "publishedTimeText" in renderer:
        lines.append(plain(simple(renderer["publishedTimeText"])))
    lines.extend(lines_text([
        badge_line("Badges: ", renderer.get("badges"), "label"),
        badge_line("Owner badges: ", renderer.get("ownerBadges"), "tooltip"),
    ]))
    return Item(spaced(runs(get(renderer, "title"))), lines, VideoNode(get(renderer, "videoId")))


def grid_video_renderer(renderer: Any) -> Item:
    lines: Text = [runs(get(renderer, "shortBylineText")), []]
    if "publishedTimeText" in renderer:
        lines.append(plain(simple(renderer["publishedTimeText"])))
    if "shortViewCountText" in renderer:
        lines.append(view_count(renderer["shortViewCountText"]))
    lines.extend(lines_text([
        badge_line("Badges: ", renderer.get("badges"), "label"),
        badge_line("Owner badges: ", renderer.get("ownerBadges"), "tooltip"),
    ]))
    return Item(spaced(runs(get(renderer, "title"))), lines, VideoNode(get(renderer, "videoId")))


def game_details(renderer: Any) -> Item:
    """A `gameCardRenderer`'s details, opens the game's page."""
    details = get(renderer, "game", "gameDetailsRenderer")
    endpoint = get(details, "endpoint", "browseEndpoint")
    viewers = details.get("liveViewersText")
    return Item(
        spaced(plain(simple(get(details, "title")))),
        [plain(label(viewers))] if viewers is not None else [],
        GameNode(get(endpoint, "browseId"), endpoint.get("params")),
    )


def reel_item(renderer: Any) -> Item:
    return Item(
        spaced(plain(simple(get(renderer, "headline")))),
        [plain(label(get(renderer, "viewCountText")))],
        VideoNode(get(renderer, "videoId")),
    )


def section_item(content: Any, where: str) -> Item:
    """One entry of a rich shelf or reel shelf."""
    key = only_key(content, ("videoRenderer", "reelItemRenderer", "gameCardRenderer"), where)
    if key == "videoRenderer":
        return video_renderer(content[key])
    if key == "reelItemRenderer":
        return reel_item(content[key])
    if key == "gameCardRenderer":
        return game_details(content[key])
    raise unknown(content, where)


def title_line(title: Any) -> List:
    """Shelf titles come as runs or simple text."""
    return any_text(title)


def rich_section(renderer: Any) -> List[Item]:
    shelf = get(renderer, "content", "richShelfRenderer")
    subtitle = shelf.get("subtitle")
    endpoint = opt(shelf, "endpoint", "browseEndpoint")
    node = NONE
    if endpoint is not None:
        node = GameNode(get(endpoint, "browseId"), endpoint.get("params"))
    items = [header(title_line(get(shelf, "title")), [runs(subtitle)] if subtitle else [], node)]
    for i, content in enumerate(get_list(shelf, "contents")):
        items.append(section_item(
            get(content, "richItemRenderer", "content"), f"richShelfRenderer.contents[{i}]"))
    # Line at the end of section for separation
    items.append(blank())
    return items


def rich_grid_item(content: Any, items: List[Item], where: str) -> Optional[str]:
    """Add one rich grid entry to `items`, returning a continuation token if it is one."""
    key = only_key(content, (
        "richItemRenderer", "richSectionRenderer", "gridVideoRenderer",
        "gameCardRenderer", "continuationItemRenderer",
    ), where)
    if key == "richItemRenderer":
        inner = get(content, key, "content")
        items.append(section_item(inner, f"{where}.richItemRenderer.content"))
    elif key == "richSectionRenderer":
        items.extend(rich_section(content[key]))
    elif key == "gridVideoRenderer":
        items.append(grid_video_renderer(content[key]))
    elif key == "gameCardRenderer":
        items.append(game_details(content[key]))
    elif key == "continuationItemRenderer":
        return continuation_token(content[key])
    else:
        raise unknown(content, where)
    return None


def rich_grid_contents(contents: List[Any], items: List[Item], where: str) -> Optional[str]:
    continuation = None
    for i, content in enumerate(contents):
        token = rich_grid_item(content, items, f"{where}[{i}]")
        if token is not None:
            continuation = token
    return continuation


def chip_items(grid: Any) -> List[Item]:
    """The tags above the home feed, each opening a category."""
    items = []
    chips = opt(grid, "header", "feedFilterChipBarRenderer", "contents", default=[])
    for chip in chips:
        renderer = chip.get("chipCloudChipRenderer")
        if renderer is None:
            continue
        token = opt(renderer, "navigationEndpoint", "continuationCommand", "token")
        title = any_text(get(renderer, "text"))
        if token is None:
            # The selected tag has nowhere to go
            items.append(Item([title], [], NONE))
        else:
            items.append(Item([title], [], HeaderNode(token)))
    if items:
        items.append(blank())
    return items


def first_tab_content(data: Any) -> Any:
    for tab in get_list(data, "contents", "twoColumnBrowseResultsRenderer", "tabs"):
        content = opt(tab, "tabRenderer", "content")
        if content is not None:
            return content
    return get(data, "contents", "twoColumnBrowseResultsRenderer", "tabs", 0,
               "tabRenderer", "content")


def decode_home_page(page: str) -> Tuple[List[Item], Optional[str]]:
    """The home feed embedded in the home page's HTML."""
    data = _initial_data(page)
    grid = get(first_tab_content(data), "richGridRenderer")
    items = chip_items(grid)
    continuation = rich_grid_contents(get_list(grid, "contents"), items, "richGridRenderer.contents")
    logger.debug(f"Home page has {len(items)} items")
    return items, continuation


def _initial_data(page: str) -> Any:
    start = page.find(INITIAL_DATA_START)
    if start < 0:
        raise ExtractionError(f"Page no longer contains the marker {INITIAL_DATA_START!r}")
    return extract_json(page[start + len(INITIAL_DATA_START):], "{", INITIAL_DATA_END,
                        overshoot=len(INITIAL_DATA_END))


def decode_grid_continuation(data: Any, items: List[Item]) -> Optional[str]:
    """Rich grid items from a browse continuation, appended to `items`."""
    return rich_grid_contents(
        append_actions(data, "onResponseReceivedActions"), items, "continuationItems")


# Game pages

def horizontal_card_list(renderer: Any) -> List[Item]:
    head = get(renderer, "header", "richListHeaderRenderer")
    subtitle = head.get("subtitle")
    items = [header(title_line(get(head, "title")), [runs(subtitle)] if subtitle else [])]
    for i, card in enumerate(get_list(renderer, "cards")):
        where = f"horizontalCardListRenderer.cards[{i}]"
        key = only_key(card, (
            "videoCardRenderer", "gameCardRenderer", "searchRefinementCardRenderer"), where)
        if key == "videoCardRenderer":
            video = card[key]
            lines: Text = [plain(simple(get(video, "metadataText"))), []]
            if "lengthText" in video:
                lines.append(plain(f"Length: {label(video['lengthText'])}"))
            badges = badge_line("Badges: ", video.get("ownerBadges"), "tooltip")
            if badges is not None:
                lines.append(badges)
            items.append(Item(spaced(runs(get(video, "title"))), lines,
                              VideoNode(get(video, "videoId"))))
        elif key == "gameCardRenderer":
            items.append(game_details(card[key]))
        elif key == "searchRefinementCardRenderer":
            refinement = card[key]
            query = get(refinement, "searchEndpoint", "searchEndpoint", "query")
            items.append(Item([runs(get(refinement, "query"))], [], SearchNode(query)))
        else:
            raise unknown(card, where)
    return items


def reel_shelf(renderer: Any) -> List[Item]:
    items = [header(title_line(get(renderer, "title")))]
    for i, item in enumerate(get_list(renderer, "items")):
        items.append(section_item(item, f"reelShelfRenderer.items[{i}]"))
    return items


def shelf(renderer: Any, items: List[Item]) -> Optional[str]:
    """A `shelfRenderer`, returning a continuation token if its grid has one."""
    title = renderer.get("title")
    if title is not None:
        subtitle = renderer.get("subtitle")
        items.append(header(title_line(title), [runs(subtitle)] if subtitle else []))
    content = get(renderer, "content")
    key = only_key(content, (
        "gridRenderer", "expandedShelfContentsRenderer", "verticalListRenderer"),
        "shelfRenderer.content")
    if key == "gridRenderer":
        for i, item in enumerate(get_list(content, key, "items")):
            token = rich_grid_item(item, items, f"gridRenderer.items[{i}]")
            if token is not None:
                return token
    elif key == "expandedShelfContentsRenderer":
        for item in get_list(content, key, "items"):
            items.append(video_renderer(get(item, "videoRenderer")))
    elif key == "verticalListRenderer":
        for item in get_list(content, key, "items"):
            items.append(video_renderer(get(item, "videoRenderer")))
    else:
        raise unknown(content, "shelfRenderer.content")
    return None


def item_section(renderer: Any, items: List[Item]) -> Optional[str]:
    """The contents of an `itemSectionRenderer` on a game page."""
    continuation = None
    for i, content in enumerate(get_list(renderer, "contents")):
        where = f"itemSectionRenderer.contents[{i}]"
        key = only_key(content, (
            "horizontalCardListRenderer", "reelShelfRenderer", "shelfRenderer"), where)
        if key == "horizontalCardListRenderer":
            items.extend(horizontal_card_list(content[key]))
        elif key == "reelShelfRenderer":
            items.extend(reel_shelf(content[key]))
        elif key == "shelfRenderer":
            token = shelf(content[key], items)
            if token is not None:
                continuation = token
        else:
            raise unknown(content, where)
    return continuation


def decode_browse(data: Any) -> Tuple[List[Item], Optional[str]]:
    """A game's browse page: a rich grid or a list of sections."""
    content = first_tab_content(data)
    items: List[Item] = []
    if "richGridRenderer" in content:
        grid = content["richGridRenderer"]
        items.extend(chip_items(grid))
        continuation = rich_grid_contents(
            get_list(grid, "contents"), items, "richGridRenderer.contents")
        return items, continuation
    continuation = None
    for i, section in enumerate(get_list(content, "sectionListRenderer", "contents")):
        where = f"sectionListRenderer.contents[{i}]"
        if "itemSectionRenderer" in section:
            token = item_section(section["itemSectionRenderer"], items)
        elif "continuationItemRenderer" in section:
            token = continuation_token(section["continuationItemRenderer"])
        else:
            raise unknown(section, where)
        if token is not None:
            continuation = token
    return items, continuation
