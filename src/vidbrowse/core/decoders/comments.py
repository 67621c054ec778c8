"""Decoders for comment sections and comment replies."""

from typing import Any, List, Optional

from ..models import CommentNode, Item, Text
from .base import (
    append_actions, continuation_token, get, int_to_rgb, label, only_key, plain, runs,
    simple, spaced, unknown,
)


def comment(renderer: Any) -> Item:
    lines: Text = [
        runs(get(renderer, "contentText")),
        [],
        runs(get(renderer, "publishedTimeText")),
    ]
    # Comments that haven't been liked yet don't have a like count
    if "voteCount" in renderer:
        lines.append(plain(label(renderer["voteCount"])))
    if renderer.get("authorIsChannelOwner"):
        lines.append(plain("Video uploader"))

    pinned = renderer.get("pinnedCommentBadge")
    if pinned is not None:
        badge = get(pinned, "pinnedCommentBadgeRenderer")
        colour = get(badge, "color", "basicColorPaletteData", "foregroundTitleColor")
        lines.append(runs(get(badge, "label"), fg=int_to_rgb(colour)))

    author_badge = renderer.get("authorCommentBadge")
    if author_badge is not None:
        badge = get(author_badge, "authorCommentBadgeRenderer")
        palette = badge.get("color", {}).get("basicColorPaletteData")
        if palette is None:
            lines.append(plain(get(badge, "iconTooltip")))
        else:
            bg = palette.get("backgroundColor")
            lines.append(plain(
                get(badge, "iconTooltip"),
                fg=int_to_rgb(get(palette, "foregroundTitleColor")),
                bg=int_to_rgb(bg) if bg is not None else None,
            ))

    if "replyCount" in renderer:
        lines.append(plain(f"{renderer['replyCount']} replies"))

    return Item(spaced(plain(simple(get(renderer, "authorText")))), lines)


def reply_item(content: Any, items: List[Item], where: str) -> Optional[str]:
    """A reply, or the button that loads more replies."""
    key = only_key(content, ("commentRenderer", "continuationItemRenderer"), where)
    if key == "commentRenderer":
        items.append(comment(content[key]))
        return None
    if key == "continuationItemRenderer":
        return get(content[key], "button", "buttonRenderer", "command",
                   "continuationCommand", "token")
    raise unknown(content, where)


def thread_item(content: Any, items: List[Item], where: str) -> Optional[str]:
    """A comment thread, or the token for the next batch of threads."""
    if "commentThreadRenderer" in content:
        thread = content["commentThreadRenderer"]
        items.append(comment(get(thread, "comment", "commentRenderer")))
        replies = thread.get("replies")
        if replies is not None:
            # Activating the comment opens its replies
            first = get(replies, "commentRepliesRenderer", "contents", 0, "continuationItemRenderer")
            items[-1].node = CommentNode(continuation_token(first))
        return None
    if "continuationItemRenderer" in content:
        return continuation_token(content["continuationItemRenderer"])
    # The sort header and anything else above the comments
    return None


def decode_comments(data: Any, items: List[Item]) -> Optional[str]:
    """Comment threads from a first or continued comments response, appended to `items`."""
    continuation = None
    for i, content in enumerate(append_actions(data, "onResponseReceivedEndpoints")):
        token = thread_item(content, items, f"continuationItems[{i}]")
        if token is not None:
            continuation = token
    return continuation


def decode_replies(data: Any, items: List[Item]) -> Optional[str]:
    """A comment's replies, appended to `items`."""
    continuation = None
    for i, content in enumerate(append_actions(data, "onResponseReceivedEndpoints")):
        token = reply_item(content, items, f"continuationItems[{i}]")
        if token is not None:
            continuation = token
    return continuation
