"""Contact form submission and admin triage."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, List, String, Text
from protean.utils.globals import current_domain

from patisserie.contact.contact import USER_AGENT_MAX_LENGTH, Contact, ContactStatus
from patisserie.domain import patisserie

_STATUSES = [status.value for status in ContactStatus]
_BULK_ACTIONS = ("updateStatus", "delete", "archive")


@patisserie.command(part_of="Contact")
class SubmitContact:
    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)
    phone: String(max_length=20)
    subject: String(required=True, max_length=200)
    message: Text(required=True)
    user_agent: String(max_length=USER_AGENT_MAX_LENGTH, sanitize=False)
    ip_address: String(max_length=64)


@patisserie.command(part_of="Contact")
class UpdateContactStatus:
    contact_id: Identifier(required=True)
    status: String(max_length=20)
    is_important: Boolean()
    tags: Text(sanitize=False)  # JSON array, omitted when unchanged


@patisserie.command(part_of="Contact")
class ReplyToContact:
    contact_id: Identifier(required=True)
    reply: Text()
    replied_by: Identifier()
    mark_as_resolved: Boolean(default=False)


@patisserie.command(part_of="Contact")
class DeleteContact:
    contact_id: Identifier(required=True)


@patisserie.command(part_of="Contact")
class BulkUpdateContacts:
    contact_ids: List(content_type=str)
    action: String(max_length=20)
    status: String(max_length=20)


def _check_status(status):
    if status and status not in _STATUSES:
        raise ValidationError({"status": ["Invalid status. Must be: unread, read, resolved, or archived"]})


@patisserie.command_handler(part_of=Contact)
class ManageContactHandler:
    @handle(SubmitContact)
    def submit_contact(self, command):
        contact = Contact.submit(
            name=command.name,
            email=command.email,
            subject=command.subject,
            message=command.message,
            phone=command.phone,
            user_agent=command.user_agent,
            ip_address=command.ip_address,
        )
        current_domain.repository_for(Contact).add(contact)
        return str(contact.id)

    @handle(UpdateContactStatus)
    def update_contact_status(self, command):
        _check_status(command.status)

        repo = current_domain.repository_for(Contact)
        contact = repo.get(command.contact_id)
        contact.update_status(
            status=command.status,
            is_important=command.is_important,
            tags=json.loads(command.tags) if command.tags else None,
        )
        repo.add(contact)

    @handle(ReplyToContact)
    def reply_to_contact(self, command):
        repo = current_domain.repository_for(Contact)
        contact = repo.get(command.contact_id)
        contact.reply(
            command.reply,
            replied_by=command.replied_by,
            mark_as_resolved=command.mark_as_resolved,
        )
        repo.add(contact)

    @handle(DeleteContact)
    def delete_contact(self, command):
        repo = current_domain.repository_for(Contact)
        contact = repo.get(command.contact_id)
        repo._dao.delete(contact)

    @handle(BulkUpdateContacts)
    def bulk_update_contacts(self, command):
        if not command.contact_ids:
            raise ValidationError({"contact_ids": ["Contact IDs array is required"]})
        if command.action not in _BULK_ACTIONS:
            raise ValidationError({"action": ["Invalid action. Must be: updateStatus, delete, or archive"]})
        if command.action == "updateStatus":
            if not command.status:
                raise ValidationError({"status": ["Status is required for updateStatus action"]})
            _check_status(command.status)

        repo = current_domain.repository_for(Contact)
        contacts = repo._dao.query.filter(id__in=list(command.contact_ids)).limit(None).all().items

        for contact in contacts:
            if command.action == "delete":
                repo._dao.delete(contact)
                continue

            status = command.status if command.action == "updateStatus" else ContactStatus.ARCHIVED.value
            contact.update_status(status=status)
            repo.add(contact)

        return len(contacts)
