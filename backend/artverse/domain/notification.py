"""
Notification and contact-form Domain Models
"""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from artverse.domain.common import DomainModel


class NotificationView(DomainModel):
    id: str
    type: str
    message: str
    read: bool
    # Stored on the ORM row as `meta`
    metadata: Optional[Dict[str, Any]] = Field(None, validation_alias="meta")
    created_at: Optional[datetime] = None


class ContactRequest(BaseModel):
    """All fields are checked for presence by the route to return one message"""

    name: Optional[str] = None
    email: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None
