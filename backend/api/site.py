"""Site content API endpoints."""

from typing import Any

from fastapi import APIRouter

from backend.core.exceptions import NotFoundError
from backend.core.rate_limit import RateLimitStandard
from backend.schemas.site import SiteContentResponse
from backend.services.site_content import SECTIONS, get_site_content

router = APIRouter(prefix="/api/site", tags=["site"])


@router.get("", response_model=SiteContentResponse)
async def get_content(_: RateLimitStandard) -> dict[str, Any]:
    """Return every static section of the page."""
    return get_site_content()


@router.get("/{section}")
async def get_section(section: str, _: RateLimitStandard) -> Any:
    """Return a single section, e.g. `timeline` or `capabilities`."""
    if section not in SECTIONS:
        raise NotFoundError("Section", section)
    return get_site_content()[section]
