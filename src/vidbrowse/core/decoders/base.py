"""Strict JSON access and the text conventions shared by every decoder."""

import json
from typing import Any, Iterable, List, Optional

from ..errors import DecodeError, ExtractionError
from ..models import NONE, Item, Line, Node, RGB, Span, Text

_MISSING = object()


def _path(parts: Iterable[Any]) -> str:
    return "".join(f"[{p}]" if isinstance(p, int) else f".{p}" for p in parts).lstrip(".")


def get(obj: Any, *path: Any) -> Any:
    """Walk `path` through nested dicts/lists, raising DecodeError if any step is missing."""
    walked = []
    for key in path:
        walked.append(key)
        try:
            obj = obj[key]
        except (KeyError, IndexError, TypeError):
            raise DecodeError(f"missing field `{key}`", _path(walked)) from None
    return obj


def opt(obj: Any, *path: Any, default: Any = None) -> Any:
    """Like `get`, but returns `default` when the path doesn't exist."""
    for key in path:
        try:
            obj = obj[key]
        except (KeyError, IndexError, TypeError):
            return default
    return obj


def get_list(obj: Any, *path: Any) -> List[Any]:
    value = get(obj, *path)
    if not isinstance(value, list):
        raise DecodeError("expected a list", _path(path))
    return value


def only_key(obj: Any, known: Iterable[str], where: str) -> Optional[str]:
    """Return the first known renderer key present in `obj`, or None."""
    if not isinstance(obj, dict):
        raise DecodeError("expected an object", where)
    for key in known:
        if key in obj:
            return key
    return None


def unknown(obj: Any, where: str) -> DecodeError:
    keys = ", ".join(sorted(obj)) if isinstance(obj, dict) else type(obj).__name__
    return DecodeError(f"unrecognised item ({keys})", where)


def extract_json(page: str, start: str, end: str, overshoot: int = 0) -> Any:
    """Cut the JSON between two markers out of an HTML page and parse it.

    `overshoot` is how many characters of `end` are not part of the JSON,
    e.g. 1 for a trailing semicolon.
    """
    begin = page.find(start)
    if begin < 0:
        raise ExtractionError(f"Page no longer contains the marker {start!r}")
    stop = page.find(end, begin)
    if stop < 0:
        raise ExtractionError(f"Page no longer contains the marker {end!r} after {start!r}")
    raw = page[begin:stop + len(end) - overshoot]
    try:
        return json.loads(raw)
    except ValueError as e:
        raise DecodeError(f"embedded JSON is invalid: {e}") from e


# Text

def int_to_rgb(colour: int) -> RGB:
    """First byte is alpha (ignored), last three are rgb."""
    return ((colour & 0xFF0000) >> 16, (colour & 0xFF00) >> 8, colour & 0xFF)


def plain(text: str, **style: Any) -> Line:
    return [Span(text, **style)]


def runs(obj: Any, **style: Any) -> Line:
    """A `{"runs": [...]}` object as one line, keeping bold and italics."""
    line = []
    for run in get_list(obj, "runs"):
        line.append(Span(
            get(run, "text"),
            bold=style.get("bold", False) or run.get("bold") is True,
            italic=style.get("italic", False) or run.get("italics") is True,
            underline=style.get("underline", False),
            crossed_out=style.get("crossed_out", False),
            fg=style.get("fg"),
            bg=style.get("bg"),
        ))
    return line


def simple(obj: Any) -> str:
    """The string of a `{"simpleText": ...}` object."""
    return get(obj, "simpleText")


def label(obj: Any) -> str:
    """The accessibility label of an accessible text object."""
    return get(obj, "accessibility", "accessibilityData", "label")


def any_text(obj: Any) -> Line:
    """Text that comes either as runs or as simple text."""
    if isinstance(obj, dict) and "runs" in obj:
        return runs(obj)
    return plain(simple(obj))


def view_count(obj: Any) -> Line:
    """View counts are accessible text on videos but runs on streams."""
    if isinstance(obj, dict) and "accessibility" in obj:
        return plain(label(obj))
    return runs(obj)


def spaced(line: Line) -> Text:
    """A title line with an empty line below for spacing."""
    return [line, []]


def underlined(line: Line) -> Text:
    return [[Span(s.text, s.bold, s.italic, True, s.crossed_out, s.fg, s.bg) for s in line]]


def blank() -> Item:
    """An empty separator row."""
    return Item([[]], [], NONE)


def header(title: Line, detail: Optional[Text] = None, node: Node = NONE) -> Item:
    return Item(underlined(title), detail or [], node)


def badge_line(prefix: str, badges: Optional[List[Any]], field: str) -> Optional[Line]:
    """`Badges: a, b` from a list of metadataBadgeRenderer objects."""
    if not badges:
        return None
    names = [get(badge, "metadataBadgeRenderer", field) for badge in badges]
    return plain(f"{prefix}{', '.join(names)}")


def continuation_token(renderer: Any) -> str:
    """Token of a continuationItemRenderer."""
    return get(renderer, "continuationEndpoint", "continuationCommand", "token")


_ACTION_ALIASES = {
    "onResponseReceivedActions": "onResponseReceivedEndpoints",
    "onResponseReceivedEndpoints": "onResponseReceivedActions",
}


def append_actions(data: Any, key: str) -> List[Any]:
    """The continuation items of every append/reload action in a continuation response."""
    if not isinstance(data, dict):
        raise DecodeError("expected an object", key)
    actions = data.get(key)
    if actions is None and key in _ACTION_ALIASES:
        actions = data.get(_ACTION_ALIASES[key])
    if actions is None:
        raise DecodeError(f"missing field `{key}`", key)
    items = []
    for i, action in enumerate(actions):
        command = action.get("appendContinuationItemsAction") or action.get(
            "reloadContinuationItemsCommand")
        if command is None:
            raise DecodeError("missing field `appendContinuationItemsAction`", f"{key}[{i}]")
        items.extend(command.get("continuationItems", []))
    return items


def lines_text(lines: List[Optional[Line]]) -> Text:
    """Drop the lines that weren't available."""
    return [line for line in lines if line is not None]
