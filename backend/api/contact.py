"""Contact form API endpoints."""

import logging
import uuid

from fastapi import APIRouter, BackgroundTasks, Depends, status

from backend.core.rate_limit import RateLimitContact
from backend.schemas.contact import ContactFormRequest, ContactFormResponse
from backend.services.inquiry_mailer import InquiryMailer, get_inquiry_mailer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/contact", tags=["contact"])

SUCCESS_MESSAGE = "Thank you for your inquiry. Our team will respond within 24-48 hours."


def new_reference() -> str:
    """Short reference quoted back to the sender and in the forwarded email."""
    return f"DEF-{uuid.uuid4().hex[:8].upper()}"


@router.post("", response_model=ContactFormResponse, status_code=status.HTTP_201_CREATED)
async def submit_contact_form(
    data: ContactFormRequest,
    background_tasks: BackgroundTasks,
    _: RateLimitContact,
    mailer: InquiryMailer = Depends(get_inquiry_mailer),
):
    """
    Submit a contact inquiry.

    The inquiry is acknowledged immediately; forwarding it to the program
    mailbox happens in the background and never fails the request.
    """
    reference = new_reference()

    # Message bodies stay out of the logs
    logger.info(
        f"Contact inquiry received: ref={reference}, clearance={data.clearance_level or 'none'}, "
        f"organization={'yes' if data.organization else 'no'}"
    )

    background_tasks.add_task(mailer.forward_inquiry, data, reference)

    return ContactFormResponse(success=True, message=SUCCESS_MESSAGE, reference=reference)
