"""Decoders for search results."""

from typing import Any, List, Optional, Tuple

from ..models import (
    NONE, ChannelNode, Item, PlaylistNode, SearchNode, Span, VideoNode,
)
from .base import (
    append_actions, blank, continuation_token, get, get_list, header, int_to_rgb, label,
    only_key, opt, plain, runs, simple, spaced, unknown,
)
from .feed import horizontal_card_list, reel_shelf, shelf, video_renderer

ITEM_SECTION_KEYS = (
    "didYouMeanRenderer", "channelRenderer", "videoRenderer", "reelShelfRenderer",
    "shelfRenderer", "playlistRenderer", "horizontalCardListRenderer",
    "backgroundPromoRenderer", "adSlotRenderer",
)


def playlist(renderer: Any) -> List[Item]:
    items = [Item(
        spaced(plain(simple(get(renderer, "title")))),
        [runs(get(renderer, "longBylineText")), runs(get(renderer, "thumbnailText"))],
        PlaylistNode(get(renderer, "playlistId")),
    )]
    # First few videos
    for video in get_list(renderer, "videos"):
        child = get(video, "childVideoRenderer")
        items.append(Item(
            [plain(simple(get(child, "title")))],
            [plain(label(get(child, "lengthText")))],
            VideoNode(get(child, "videoId")),
        ))
    items.append(blank())
    return items


def item_section(renderer: Any, items: List[Item]) -> None:
    for i, content in enumerate(get_list(renderer, "contents")):
        where = f"itemSectionRenderer.contents[{i}]"
        key = only_key(content, ITEM_SECTION_KEYS, where)
        if key == "videoRenderer":
            items.append(video_renderer(content[key]))
        elif key == "shelfRenderer":
            # Shelves in search results are never continued
            shelf(content[key], items)
        elif key == "playlistRenderer":
            items.extend(playlist(content[key]))
        elif key == "channelRenderer":
            channel = content[key]
            snippet = channel.get("descriptionSnippet")
            items.append(Item(
                spaced(plain(simple(get(channel, "title")))),
                [runs(snippet)] if snippet else [],
                ChannelNode(get(channel, "channelId")),
            ))
        elif key == "reelShelfRenderer":
            items.extend(reel_shelf(content[key]))
        elif key == "didYouMeanRenderer":
            suggestion = content[key]
            endpoint = get(suggestion, "correctedQueryEndpoint", "searchEndpoint")
            items.append(Item(
                [[Span("Did you mean: ")] + runs(get(suggestion, "correctedQuery"))],
                [],
                SearchNode(get(endpoint, "query"), endpoint.get("params")),
            ))
        elif key == "backgroundPromoRenderer":
            promo = content[key]
            items.append(Item([runs(get(promo, "title"))], [runs(get(promo, "bodyText"))]))
        elif key == "horizontalCardListRenderer":
            items.extend(horizontal_card_list(content[key]))
        elif key == "adSlotRenderer":
            continue
        else:
            raise unknown(content, where)


def section_list_content(content: Any, items: List[Item], where: str) -> Optional[str]:
    if "itemSectionRenderer" in content:
        item_section(content["itemSectionRenderer"], items)
        return None
    if "continuationItemRenderer" in content:
        return continuation_token(content["continuationItemRenderer"])
    raise unknown(content, where)


def filters(section_list: Any) -> List[Item]:
    items = [header(plain("Filters"))]
    groups = get_list(section_list, "subMenu", "searchSubMenuRenderer", "groups")
    for group in groups:
        renderer = get(group, "searchFilterGroupRenderer")
        items.append(header(plain(simple(get(renderer, "title")))))
        for search_filter in get_list(renderer, "filters"):
            search_filter = get(search_filter, "searchFilterRenderer")
            status = search_filter.get("status")
            title = plain(
                simple(get(search_filter, "label")),
                # Selected filters are bold, unavailable ones are crossed out
                bold=status == "FILTER_STATUS_SELECTED",
                crossed_out=status == "FILTER_STATUS_DISABLED",
            )
            endpoint = opt(search_filter, "navigationEndpoint", "searchEndpoint")
            node = NONE
            if endpoint is not None:
                node = SearchNode(get(endpoint, "query"), endpoint.get("params"))
            items.append(Item([title], [plain(search_filter.get("tooltip", ""))], node))
    items.append(blank())
    return items


def watch_card(content: Any) -> List[Item]:
    """The channel card shown to the right of some results."""
    card = get(content, "universalWatchCardRenderer")
    head = get(card, "header", "watchCardRichHeaderRenderer")
    palette = get(head, "colorSupportedDatas", "basicColorPaletteData")
    bg = palette.get("backgroundColor")
    bg = int_to_rgb(bg) if bg is not None else None
    body_fg = palette.get("foregroundBodyColor")
    body_fg = int_to_rgb(body_fg) if body_fg is not None else None

    items = [Item(
        spaced(plain(simple(get(head, "title")),
                     fg=int_to_rgb(get(palette, "foregroundTitleColor")), bg=bg)),
        [plain(simple(get(head, "subtitle")), fg=body_fg, bg=bg)],
        ChannelNode(get(head, "titleNavigationEndpoint", "browseEndpoint", "browseId")),
    )]

    hero = get(card, "callToAction", "watchCardHeroVideoRenderer")
    items.append(Item(
        spaced(plain(simple(get(hero, "title")))),
        [plain(simple(get(hero, "subtitle"))), [], plain(label(get(hero, "lengthText")))],
        VideoNode(get(hero, "navigationEndpoint", "watchEndpoint", "videoId")),
    ))

    for section in get_list(card, "sections"):
        for video_list in get_list(section, "watchCardSectionSequenceRenderer", "lists"):
            renderer = get(video_list, "verticalWatchCardListRenderer")
            for video in get_list(renderer, "items"):
                video = get(video, "watchCardCompactVideoRenderer")
                items.append(Item(
                    spaced(plain(simple(get(video, "title")))),
                    [plain(simple(get(video, "subtitle"))), [],
                     plain(label(get(video, "lengthText")))],
                    VideoNode(get(video, "navigationEndpoint", "watchEndpoint", "videoId")),
                ))
            view_all = get(renderer, "viewAllEndpoint", "browseEndpoint")
            items.append(Item(
                [plain("View all")], [],
                ChannelNode(get(view_all, "browseId"), view_all.get("params")),
            ))
    return items


def decode_search(data: Any) -> Tuple[List[Item], Optional[str]]:
    """A search response: result count, suggestions, filters, then the results."""
    results = get(data, "contents", "twoColumnSearchResultsRenderer")
    section_list = get(results, "primaryContents", "sectionListRenderer")

    items = [Item(spaced(plain(f"{get(data, 'estimatedResults')} results")))]

    refinements = data.get("refinements")
    if refinements:
        items.append(header(plain("Search suggestions")))
        for refinement in refinements:
            items.append(Item([plain(refinement)], [], SearchNode(refinement)))
        items.append(blank())

    items.extend(filters(section_list))

    secondary = opt(results, "secondaryContents", "secondarySearchContainerRenderer")
    if secondary is not None:
        for content in get_list(secondary, "contents"):
            items.extend(watch_card(content))
        items.append(blank())

    continuation = None
    for i, content in enumerate(get_list(section_list, "contents")):
        token = section_list_content(content, items, f"sectionListRenderer.contents[{i}]")
        if token is not None:
            continuation = token
    return items, continuation


def decode_search_continuation(data: Any, items: List[Item]) -> Optional[str]:
    continuation = None
    for i, content in enumerate(append_actions(data, "onResponseReceivedCommands")):
        token = section_list_content(content, items, f"continuationItems[{i}]")
        if token is not None:
            continuation = token
    return continuation
