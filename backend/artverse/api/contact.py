"""
Contact Form API Endpoint
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from artverse.api.responses import success
from artverse.core.config import settings
from artverse.core.database import get_db
from artverse.core.rate_limit import rate_limit
from artverse.domain.notification import ContactRequest
from artverse.repositories import ContactRepository

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(rate_limit(settings.CONTACT_RATE_LIMIT))],
)
def submit_contact(body: Optional[ContactRequest] = None, db: Session = Depends(get_db)):
    fields = [body.name, body.email, body.subject, body.message] if body else []
    if not fields or not all(value and value.strip() for value in fields):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="All fields are required")

    contact = ContactRepository(db).create(
        name=body.name.strip(),
        email=body.email.strip(),
        subject=body.subject.strip(),
        message=body.message.strip(),
    )
    db.commit()
    logger.info(f"Contact message {contact.id} received")
    return success(data={"id": contact.id}, message="Message sent successfully")
