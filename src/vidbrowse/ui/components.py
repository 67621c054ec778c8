"""Drawing helpers: styled text to curses attributes, wrapping and colours."""

import curses
import re
from typing import Dict, List, Optional, Tuple

from ..core.models import RGB, Line, Span

# The eight colours every terminal has
BASIC_COLOURS: Dict[int, RGB] = {
    curses.COLOR_BLACK: (0, 0, 0),
    curses.COLOR_RED: (205, 0, 0),
    curses.COLOR_GREEN: (0, 205, 0),
    curses.COLOR_YELLOW: (205, 205, 0),
    curses.COLOR_BLUE: (0, 0, 238),
    curses.COLOR_MAGENTA: (205, 0, 205),
    curses.COLOR_CYAN: (0, 205, 205),
    curses.COLOR_WHITE: (229, 229, 229),
}

KEY_HELP = ["back: b", "search: s", "refresh: r", "next: n", "home: h", "quit: q"]

_TOKEN = re.compile(r"\S+\s*|\s+")


def nearest_colour(rgb: RGB) -> int:
    """The basic terminal colour closest to `rgb`."""
    def distance(colour: int) -> int:
        return sum((a - b) ** 2 for a, b in zip(BASIC_COLOURS[colour], rgb))
    return min(BASIC_COLOURS, key=distance)


class Palette:
    """Allocates curses colour pairs on demand."""

    def __init__(self, enabled: bool):
        self.enabled = enabled
        self._pairs: Dict[Tuple[int, int], int] = {}

    @classmethod
    def for_terminal(cls) -> "Palette":
        if not curses.has_colors():
            return cls(False)
        curses.start_color()
        curses.use_default_colors()
        return cls(True)

    def pair(self, fg: Optional[RGB], bg: Optional[RGB]) -> int:
        if not self.enabled or (fg is None and bg is None):
            return 0
        key = (
            nearest_colour(fg) if fg is not None else -1,
            nearest_colour(bg) if bg is not None else -1,
        )
        if key not in self._pairs:
            number = len(self._pairs) + 1
            if number >= curses.COLOR_PAIRS:
                # Out of pairs, fall back to the default colours
                return 0
            curses.init_pair(number, *key)
            self._pairs[key] = number
        return curses.color_pair(self._pairs[key])

    def attr(self, span: Span) -> int:
        attr = self.pair(span.fg, span.bg)
        if span.bold:
            attr |= curses.A_BOLD
        if span.italic:
            attr |= curses.A_ITALIC
        if span.underline:
            attr |= curses.A_UNDERLINE
        if span.crossed_out:
            attr |= curses.A_DIM
        return attr


def _restyle(span: Span, text: str) -> Span:
    return Span(text, span.bold, span.italic, span.underline, span.crossed_out, span.fg, span.bg)


def wrap_line(line: Line, width: int) -> List[Line]:
    """Word wrap a styled line to rows of at most `width` characters.

    Newlines inside spans start a new row. Words longer than a row are split.
    """
    width = max(1, width)
    rows: List[Line] = [[]]
    used = 0

    def new_row():
        nonlocal used
        rows.append([])
        used = 0

    for span in line:
        for i, part in enumerate(span.text.split("\n")):
            if i:
                new_row()
            for token in _TOKEN.findall(part):
                word = token.rstrip()
                if used and used + len(word) > width:
                    new_row()
                    if not word:
                        continue
                while len(word) > width - used:
                    rows[-1].append(_restyle(span, word[:width - used]))
                    word = word[width - used:]
                    new_row()
                # Trailing whitespace never starts a row
                space = token[len(token.rstrip()):]
                text = word + space[:max(0, width - used - len(word))]
                if text:
                    rows[-1].append(_restyle(span, text))
                    used += len(text)
    return rows


def line_length(line: Line) -> int:
    return sum(len(span.text) for span in line)


def aligned(text: str, width: int, alignment: str) -> int:
    """Column offset placing `text` inside `width` columns."""
    if alignment == "center":
        return max(0, (width - len(text)) // 2)
    if alignment == "right":
        return max(0, width - len(text))
    return 0
