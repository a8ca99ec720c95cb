"""
Page UI state for the single-page site.

Plain state cells updated from scroll, click and theme events. Nothing here
performs I/O: callers read the persisted theme and report scroll offsets,
and persist whatever toggle_theme() returns.
"""
from dataclasses import dataclass
from typing import Optional, Sequence

SCROLLED_THRESHOLD = 50
# Height of the fixed header on desktop layouts
HEADER_OFFSET = 80

THEME_DARK = "dark"
THEME_LIGHT = "light"


def resolve_dark_mode(saved_theme: Optional[str], prefers_dark: bool) -> bool:
    """A saved theme wins; without one, follow the system preference."""
    if saved_theme:
        return saved_theme == THEME_DARK
    return prefers_dark


@dataclass
class PageState:
    """UI state of one mounted page."""

    is_scrolled: bool = False
    mobile_menu_open: bool = False
    dark_mode: bool = False
    active_section: str = "#home"

    @classmethod
    def mount(cls, saved_theme: Optional[str] = None, prefers_dark: bool = False) -> "PageState":
        return cls(dark_mode=resolve_dark_mode(saved_theme, prefers_dark))

    def on_scroll(self, offset: float, section_tops: Optional[dict[str, float]] = None) -> None:
        """Update header styling and, when section positions are known, the active nav link."""
        self.is_scrolled = offset > SCROLLED_THRESHOLD
        if section_tops:
            self.active_section = active_section_for(offset, section_tops)

    def toggle_theme(self) -> str:
        """Flip the theme and return the value to persist."""
        self.dark_mode = not self.dark_mode
        return self.theme

    @property
    def theme(self) -> str:
        return THEME_DARK if self.dark_mode else THEME_LIGHT

    def toggle_mobile_menu(self) -> None:
        self.mobile_menu_open = not self.mobile_menu_open

    def navigate(self, href: str) -> str:
        """Select a section from the nav; the mobile menu always closes."""
        self.active_section = href
        self.mobile_menu_open = False
        return href


def active_section_for(
    offset: float,
    section_tops: dict[str, float],
    header_offset: float = HEADER_OFFSET,
) -> str:
    """
    The last section whose top has scrolled under the header.

    Falls back to the first section when the page is above every section top.
    """
    ordered: Sequence[tuple[str, float]] = sorted(section_tops.items(), key=lambda item: item[1])
    current = ordered[0][0]
    for href, top in ordered:
        if top <= offset + header_offset:
            current = href
    return current
