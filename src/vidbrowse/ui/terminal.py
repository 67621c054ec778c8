"""The curses interface: a list of items on the left, details of the selected one on the right."""

import curses
import logging
from typing import Callable, Optional

from ..core.errors import UnavailableError
from ..core.models import Line, Playback
from ..core.navigator import Navigator
from ..core.player import MediaPlayer
from ..core.resolver import summary_text
from .components import KEY_HELP, Palette, aligned, wrap_line

logger = logging.getLogger(__name__)

MIN_H = 8
MIN_W = 30

KEY_ENTER = (10, 13, curses.KEY_ENTER)
KEY_BACKSPACE = (curses.KEY_BACKSPACE, 127, 8)
KEY_ESCAPE = 27


class TerminalUI:
    """Renders the navigator and turns key presses into its intents."""

    def __init__(self, stdscr, navigator: Navigator, player: MediaPlayer,
                 title_alignment: str = "left"):
        self.stdscr = stdscr
        self.navigator = navigator
        self.player = player
        self.title_alignment = title_alignment
        self.palette = Palette(False)
        # Index of the first item shown in the list
        self.offset = 0

    # ---------- safe drawing ----------
    def safe_addstr(self, y: int, x: int, s: str, attr: int = 0) -> None:
        try:
            h, w = self.stdscr.getmaxyx()
            if y < 0 or x < 0 or y >= h or x >= w:
                return
            if x + len(s) > w - 1:
                s = s[: max(0, (w - 1) - x)]
            self.stdscr.addstr(y, x, s, attr)
        except curses.error:
            return

    def draw_line(self, y: int, x: int, width: int, line: Line, extra: int = 0) -> None:
        """Draw a styled line, cut at `width` columns."""
        for span in line:
            if width <= 0:
                break
            text = span.text.replace("\n", " ")[:width]
            self.safe_addstr(y, x, text, self.palette.attr(span) | extra)
            x += len(text)
            width -= len(text)

    def draw_box(self, y: int, x: int, h: int, w: int, title: str = "") -> None:
        if h < 2 or w < 2:
            return
        self.safe_addstr(y, x, "┌" + "─" * (w - 2) + "┐")
        for row in range(y + 1, y + h - 1):
            self.safe_addstr(row, x, "│")
            self.safe_addstr(row, x + w - 1, "│")
        self.safe_addstr(y + h - 1, x, "└" + "─" * (w - 2) + "┘")
        if title:
            title = title[: max(0, w - 4)]
            self.safe_addstr(y, x + 1 + aligned(title, w - 2, self.title_alignment), title,
                             curses.A_BOLD)

    # ---------- panes ----------
    def _scroll(self, height: int) -> None:
        """Move `offset` so the selected item is fully visible."""
        items = self.navigator.items
        selected = self.navigator.selected
        if selected < self.offset:
            self.offset = selected
        while self.offset < selected:
            rows = sum(len(item.title) for item in items[self.offset:selected + 1])
            if rows <= height:
                break
            self.offset += 1

    def draw_list(self, h: int, w: int) -> None:
        self.draw_box(0, 0, h, w, self.navigator.title)
        height, width = h - 2, w - 4
        self._scroll(height)

        y = 1
        for index in range(self.offset, len(self.navigator.items)):
            item = self.navigator.items[index]
            extra = curses.A_REVERSE if index == self.navigator.selected else 0
            for line in item.title:
                if y > height:
                    return
                if extra:
                    self.safe_addstr(y, 2, " " * width, extra)
                self.draw_line(y, 2, width, line, extra)
                y += 1

        if not self.navigator.items:
            self.safe_addstr(1, 2, "Nothing here"[:width], curses.A_DIM)

    def draw_detail(self, h: int, x: int, w: int) -> None:
        self.draw_box(0, x, h, w)
        height, width = h - 2, w - 4
        item = self.navigator.selected_item

        help_top = h - 1 - len(KEY_HELP)
        for i, key in enumerate(KEY_HELP):
            self.safe_addstr(help_top + i, x + w - 2 - len(key), key, curses.A_DIM)

        if item is None:
            return
        y = 1
        for line in item.detail:
            for row in wrap_line(line, width):
                if y > height or y >= help_top:
                    return
                self.draw_line(y, x + 2, width, row)
                y += 1

    def draw_notice(self, h: int, w: int) -> None:
        notice = self.navigator.notice
        if notice:
            self.safe_addstr(h - 1, 2, f" {notice} "[: max(0, w - 4)], curses.A_BOLD)

    def render(self) -> None:
        self.stdscr.erase()
        h, w = self.stdscr.getmaxyx()
        if h < MIN_H or w < MIN_W:
            self.safe_addstr(0, 0, "Terminal too small.", curses.A_BOLD)
            self.safe_addstr(1, 0, f"Need at least {MIN_W}x{MIN_H}.")
            self.stdscr.refresh()
            return
        left = w // 2
        self.draw_list(h, left)
        self.draw_detail(h, left, w - left)
        self.draw_notice(h, left)
        self.stdscr.refresh()

    # ---------- normal terminal ----------
    def _suspend(self) -> None:
        curses.endwin()

    def _resume(self) -> None:
        self.stdscr.refresh()
        curses.curs_set(0)

    def play(self, playback: Playback) -> None:
        """Leave curses while the external player runs."""
        self._suspend()
        try:
            print(summary_text(playback.summary))
            print()
            self.player.play(playback)
        finally:
            self._resume()

    def show_unavailable(self, error: UnavailableError) -> None:
        logger.warning(f"{error}")
        self._suspend()
        try:
            input(f"{error} (press enter to continue) ")
        except EOFError:
            pass
        finally:
            self._resume()

    # ---------- input ----------
    def prompt(self, label: str) -> Optional[str]:
        """A centred input box. Returns None when cancelled with Esc."""
        buf = ""
        curses.curs_set(1)
        try:
            while True:
                h, w = self.stdscr.getmaxyx()
                width = min(max(len(buf) + 4, 12), w)
                top, left = h // 2 - 1, (w - width) // 2
                for row in range(3):
                    self.safe_addstr(top + row, left, " " * width)
                self.draw_box(top, left, 3, width, label)
                shown = buf[-(width - 4):] if width > 4 else ""
                self.safe_addstr(top + 1, left + 2, shown)
                try:
                    self.stdscr.move(top + 1, min(w - 2, left + 2 + len(shown)))
                except curses.error:
                    pass
                self.stdscr.refresh()

                ch = self.stdscr.get_wch()
                if ch in KEY_ENTER or ch in ("\n", "\r"):
                    return buf.strip()
                if ch == KEY_ESCAPE or ch == "\x1b":
                    return None
                if ch in KEY_BACKSPACE or ch in ("\x7f", "\b"):
                    buf = buf[:-1]
                elif isinstance(ch, str) and ch.isprintable():
                    buf += ch
        finally:
            curses.curs_set(0)

    def _run(self, action: Callable[[], Optional[Playback]]) -> None:
        """Run an intent; unavailable videos pause with a message instead of ending the session."""
        try:
            playback = action()
        except UnavailableError as e:
            self.show_unavailable(e)
            return
        if playback is not None:
            self.play(playback)

    def handle_key(self, ch: int) -> bool:
        """Returns False when the user quits."""
        nav = self.navigator
        half = max(1, self.stdscr.getmaxyx()[0] // 2)
        if ch in (ord("q"), ord("Q")):
            return False
        if ch in (ord("j"), ord("J"), curses.KEY_DOWN):
            self._run(lambda: nav.select_delta(1))
        elif ch in (ord("k"), ord("K"), curses.KEY_UP):
            self._run(lambda: nav.select_delta(-1))
        elif ch == curses.KEY_NPAGE:
            self._run(lambda: nav.select_page(half))
        elif ch == curses.KEY_PPAGE:
            self._run(lambda: nav.select_page(-half))
        elif ch in (ord("l"), ord("L"), curses.KEY_RIGHT) or ch in KEY_ENTER:
            self._run(nav.activate)
        elif ch in (ord("b"), ord("B"), curses.KEY_LEFT):
            self._run(nav.back)
        elif ch in (ord("h"), ord("H")):
            self._run(nav.go_home)
        elif ch in (ord("s"), ord("S"), ord("/")):
            query = self.prompt("Search")
            if query:
                self._run(lambda: nav.search(query))
        elif ch in (ord("r"), ord("R")):
            self._run(nav.refresh)
        elif ch in (ord("n"), ord("N")):
            self._run(nav.show_recommendations)
        return True

    def loop(self) -> None:
        self.palette = Palette.for_terminal()
        curses.curs_set(0)
        self.stdscr.keypad(True)

        while True:
            self.render()
            if not self.handle_key(self.stdscr.getch()):
                break


def run(navigator: Navigator, player: MediaPlayer, title_alignment: str = "left") -> None:
    """Run the interface until the user quits. The terminal is restored however it ends."""
    def main(stdscr):
        TerminalUI(stdscr, navigator, player, title_alignment).loop()

    curses.wrapper(main)
