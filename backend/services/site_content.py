"""
D.E.F.E.N.D Site Content
Static content rendered by the single-page marketing site.
"""
from typing import Any

from backend.core.contact_rules import CLEARANCE_LABELS

NAV_LINKS: list[dict[str, str]] = [
    {"href": "#home", "label": "Home"},
    {"href": "#about", "label": "About"},
    {"href": "#technology", "label": "Technology"},
    {"href": "#gallery", "label": "Gallery"},
    {"href": "#contact", "label": "Contact"},
]

CAPABILITIES: list[dict[str, str]] = [
    {
        "icon": "radar",
        "title": "Advanced Surveillance",
        "description": (
            "Real-time reconnaissance with AI-enhanced target identification "
            "and tracking across diverse Indian terrains."
        ),
    },
    {
        "icon": "target",
        "title": "Precision Operations",
        "description": (
            "GPS-denied navigation capabilities with sub-meter accuracy "
            "for critical border security missions."
        ),
    },
    {
        "icon": "eye",
        "title": "Stealth Technology",
        "description": (
            "Low observable design with reduced radar cross-section "
            "optimized for high-altitude operations."
        ),
    },
    {
        "icon": "cpu",
        "title": "AI Integration",
        "description": (
            "Indigenous machine learning algorithms for autonomous "
            "decision-making and adaptive mission planning."
        ),
    },
    {
        "icon": "radio",
        "title": "Secure Communications",
        "description": (
            "Encrypted data links with anti-jamming technology and "
            "satellite connectivity for remote areas."
        ),
    },
    {
        "icon": "shield",
        "title": "Border Protection",
        "description": (
            "Counter-drone capabilities and electronic warfare suite "
            "for comprehensive territorial defense."
        ),
    },
]

STATS: list[dict[str, str]] = [
    {"value": "15+", "label": "Years of Service"},
    {"value": "500+", "label": "Units Deployed"},
    {"value": "99.7%", "label": "Mission Success"},
    {"value": "24/7", "label": "Operational Ready"},
]

TIMELINE: list[dict[str, str]] = [
    {
        "year": "2009",
        "title": "Project Initiation",
        "description": "D.E.F.E.N.D project launched with DRDO collaboration for indigenous drone development",
        "status": "completed",
    },
    {
        "year": "2012",
        "title": "First Prototype",
        "description": "Successfully tested the first prototype with advanced surveillance capabilities",
        "status": "completed",
    },
    {
        "year": "2015",
        "title": "Army Integration",
        "description": "Integrated with Indian Army for field operations and tactical deployment",
        "status": "completed",
    },
    {
        "year": "2018",
        "title": "AI Enhancement",
        "description": "Implemented indigenous AI algorithms for autonomous mission planning",
        "status": "completed",
    },
    {
        "year": "2021",
        "title": "Counter-Drone Systems",
        "description": "Deployed advanced electronic warfare and counter-drone capabilities",
        "status": "completed",
    },
    {
        "year": "2024",
        "title": "Next Generation",
        "description": "Current development: Next-gen drone with hypersonic capabilities and stealth technology",
        "status": "in-progress",
    },
    {
        "year": "2026",
        "title": "Global Integration",
        "description": "Planned integration with allied nation defense systems for collaborative operations",
        "status": "planned",
    },
]

CONTACT_DETAILS: dict[str, str] = {
    "phone": "+91 11 2301 0000",
    "email": "contact@defend-program.in",
    "address": "Defence Research Complex, New Delhi, India",
    "hours": "Mon - Fri, 0900 - 1800 IST",
}


def clearance_options() -> list[dict[str, str]]:
    """Options for the clearance level select, in display order."""
    return [{"value": value, "label": label} for value, label in CLEARANCE_LABELS.items()]


def get_site_content() -> dict[str, Any]:
    """All page sections keyed by section name."""
    return {
        "nav_links": NAV_LINKS,
        "capabilities": CAPABILITIES,
        "stats": STATS,
        "timeline": TIMELINE,
        "clearance_levels": clearance_options(),
        "contact": CONTACT_DETAILS,
    }


SECTIONS: tuple[str, ...] = tuple(get_site_content())
