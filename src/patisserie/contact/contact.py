"""Contact aggregate: messages sent through the storefront contact form."""

import re
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, List, String, Text

from patisserie.domain import patisserie

EMAIL_PATTERN = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$")
USER_AGENT_MAX_LENGTH = 500
PREVIEW_LENGTH = 100


class ContactStatus(Enum):
    UNREAD = "unread"
    READ = "read"
    RESOLVED = "resolved"
    ARCHIVED = "archived"


@patisserie.aggregate
class Contact:
    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)
    phone: String(max_length=20)
    subject: String(required=True, max_length=200)
    message: Text(required=True)
    status: String(choices=ContactStatus, default=ContactStatus.UNREAD.value)
    admin_reply: Text()
    replied_at: DateTime()
    replied_by: Identifier()
    is_important: Boolean(default=False)
    tags: List(content_type=str)
    user_agent: String(max_length=USER_AGENT_MAX_LENGTH, sanitize=False)
    ip_address: String(max_length=64)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def email_must_be_valid(self):
        if self.email and not EMAIL_PATTERN.match(self.email):
            raise ValidationError({"email": ["Please enter a valid email"]})

    @invariant.post
    def message_must_fit(self):
        if self.message and len(self.message) > 2000:
            raise ValidationError({"message": ["Message cannot exceed 2000 characters"]})

    @property
    def message_preview(self) -> str:
        if len(self.message) > PREVIEW_LENGTH:
            return self.message[:PREVIEW_LENGTH] + "..."
        return self.message

    @classmethod
    def submit(cls, name, email, subject, message, phone=None, user_agent=None, ip_address=None):
        from patisserie.contact.events import ContactSubmitted

        now = datetime.now(UTC)
        contact = cls(
            name=name.strip(),
            email=email.strip().lower(),
            phone=phone,
            subject=subject.strip(),
            message=message.strip(),
            user_agent=user_agent[:USER_AGENT_MAX_LENGTH] if user_agent else None,
            ip_address=ip_address,
            created_at=now,
            updated_at=now,
        )
        contact.raise_(
            ContactSubmitted(
                contact_id=contact.id,
                name=contact.name,
                email=contact.email,
                phone=contact.phone,
                subject=contact.subject,
                message=contact.message,
                submitted_at=now,
            )
        )
        return contact

    def update_status(self, status=None, is_important=None, tags=None):
        if status is not None:
            self.status = status
        if is_important is not None:
            self.is_important = is_important
        if tags is not None:
            self.tags = tags
        self.updated_at = datetime.now(UTC)

    def reply(self, reply, replied_by=None, mark_as_resolved=False):
        from patisserie.contact.events import ContactReplied

        if not reply or not reply.strip():
            raise ValidationError({"reply": ["Reply message is required"]})

        now = datetime.now(UTC)
        self.admin_reply = reply.strip()
        self.replied_at = now
        self.replied_by = replied_by

        if mark_as_resolved:
            self.status = ContactStatus.RESOLVED.value
        elif self.status == ContactStatus.UNREAD.value:
            self.status = ContactStatus.READ.value

        self.updated_at = now
        self.raise_(
            ContactReplied(
                contact_id=self.id,
                name=self.name,
                email=self.email,
                subject=self.subject,
                message=self.message,
                reply=self.admin_reply,
                replied_by=replied_by,
                replied_at=now,
            )
        )
