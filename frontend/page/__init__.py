"""
D.E.F.E.N.D Page State
Scroll, theme and navigation state for the single-page site.
"""
from frontend.page.state import PageState, active_section_for, resolve_dark_mode

__all__ = ["PageState", "active_section_for", "resolve_dark_mode"]
