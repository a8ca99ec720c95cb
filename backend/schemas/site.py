"""Site content schemas."""
from typing import Literal

from pydantic import BaseModel


class NavLink(BaseModel):
    href: str
    label: str


class Capability(BaseModel):
    icon: str
    title: str
    description: str


class Stat(BaseModel):
    value: str
    label: str


class TimelineEntry(BaseModel):
    year: str
    title: str
    description: str
    status: Literal["completed", "in-progress", "planned"]


class ClearanceOption(BaseModel):
    value: str
    label: str


class ContactDetails(BaseModel):
    phone: str
    email: str
    address: str
    hours: str


class SiteContentResponse(BaseModel):
    """Everything the page renders besides media assets."""

    nav_links: list[NavLink]
    capabilities: list[Capability]
    stats: list[Stat]
    timeline: list[TimelineEntry]
    clearance_levels: list[ClearanceOption]
    contact: ContactDetails
