"""Contact-support form endpoint."""

import logging

from fastapi import APIRouter, Depends, Request, status

from app.config import get_settings
from app.dependencies import get_email_service, get_optional_user, get_storage
from app.models.user import User
from app.rate_limit import limiter
from app.schemas.contact import ContactRequest, ContactResponse
from app.services.email import EmailService, redact_email
from app.storage import Storage

logger = logging.getLogger("hipo_coach")

router = APIRouter(prefix="/api", tags=["Contact"])


@router.post("/contact", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(lambda: get_settings().CONTACT_RATE_LIMIT)
def submit_contact(
    request: Request,
    body: ContactRequest,
    user: User | None = Depends(get_optional_user),
    storage: Storage = Depends(get_storage),
    email_service: EmailService = Depends(get_email_service),
) -> ContactResponse:
    """Store a support message and send the sender an acknowledgement."""
    contact = storage.create_contact_message(
        name=body.name.strip(),
        email=str(body.email),
        subject=body.subject.strip(),
        message=body.message,
        category=body.category,
        user_id=user.id if user else None,
    )

    result = email_service.send_contact_response(str(body.email), contact.name, contact.subject, contact.message)
    if not result.success:
        logger.warning("Contact auto-response not delivered: %s", result.error)

    logger.info("New contact message %s from %s: %s", contact.id, redact_email(contact.email), contact.subject)
    return ContactResponse(
        message="Your message has been sent successfully. We'll get back to you within 24 hours.",
        contact_id=contact.id,
    )
