"""
D.E.F.E.N.D Pydantic Schemas
Request/Response models for API endpoints.
"""
from backend.schemas.contact import ContactFormRequest, ContactFormResponse
from backend.schemas.site import (
    Capability,
    ClearanceOption,
    ContactDetails,
    NavLink,
    SiteContentResponse,
    Stat,
    TimelineEntry,
)

__all__ = [
    # Contact
    "ContactFormRequest",
    "ContactFormResponse",
    # Site
    "Capability",
    "ClearanceOption",
    "ContactDetails",
    "NavLink",
    "SiteContentResponse",
    "Stat",
    "TimelineEntry",
]
