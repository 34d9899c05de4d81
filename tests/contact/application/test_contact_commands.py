import pytest
from patisserie.contact.contact import Contact
from patisserie.contact.management import (
    BulkUpdateContacts,
    DeleteContact,
    ReplyToContact,
    SubmitContact,
    UpdateContactStatus,
)
from patisserie.contact.queries import contact_counts, contact_stats, contacts_by_email, list_contacts
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain


def _submit(email="asha@example.com", subject="Custom cake", message="Eggless cake for Saturday?"):
    return current_domain.process(
        SubmitContact(name="Asha", email=email, subject=subject, message=message), asynchronous=False
    )


def _contact(contact_id):
    return current_domain.repository_for(Contact).get(contact_id)


class TestSubmitContact:
    def test_admins_are_alerted(self, admin, email_channel):
        _submit(subject="Custom cake")

        alerts = email_channel.sent_to("chef@lapatisserie.shop")
        assert len(alerts) == 1
        assert alerts[0]["subject"] == "New Contact Message - Custom cake"

    def test_configured_recipients_without_admin_accounts(self, email_channel):
        _submit()

        assert [email["to"] for email in email_channel.sent_emails] == ["admin@lapatisserie.shop"]

    def test_failed_alert_keeps_the_message(self, email_channel):
        email_channel.configure(should_succeed=False)

        contact_id = _submit()

        assert _contact(contact_id).status == "unread"


class TestTriage:
    def test_update_status_and_tags(self):
        contact_id = _submit()

        current_domain.process(
            UpdateContactStatus(contact_id=contact_id, status="read", is_important=True, tags='["cakes"]'),
            asynchronous=False,
        )

        contact = _contact(contact_id)
        assert contact.status == "read"
        assert contact.is_important is True
        assert contact.tags == ["cakes"]

    def test_invalid_status(self):
        contact_id = _submit()

        with pytest.raises(ValidationError) as exc:
            current_domain.process(UpdateContactStatus(contact_id=contact_id, status="spam"), asynchronous=False)
        assert exc.value.messages["status"] == ["Invalid status. Must be: unread, read, resolved, or archived"]

    def test_reply_emails_the_visitor(self, admin, email_channel):
        contact_id = _submit(subject="Custom cake")

        current_domain.process(
            ReplyToContact(contact_id=contact_id, reply="Yes, we can!", replied_by=admin.id, mark_as_resolved=True),
            asynchronous=False,
        )

        replies = email_channel.sent_to("asha@example.com")
        assert replies[0]["subject"] == "Re: Custom cake - La Patisserie"
        assert "Yes, we can!" in replies[0]["body"]
        assert _contact(contact_id).status == "resolved"

    def test_delete(self):
        contact_id = _submit()

        current_domain.process(DeleteContact(contact_id=contact_id), asynchronous=False)

        with pytest.raises(ObjectNotFoundError):
            _contact(contact_id)


class TestBulkUpdate:
    def test_archive(self):
        ids = [_submit(subject=f"Question {n}") for n in range(3)]

        affected = current_domain.process(BulkUpdateContacts(contact_ids=ids[:2], action="archive"), asynchronous=False)

        assert affected == 2
        assert contact_counts()["archived"] == 2
        assert contact_counts()["unread"] == 1

    def test_update_status_needs_a_status(self):
        contact_id = _submit()

        with pytest.raises(ValidationError) as exc:
            current_domain.process(
                BulkUpdateContacts(contact_ids=[contact_id], action="updateStatus"), asynchronous=False
            )
        assert exc.value.messages["status"] == ["Status is required for updateStatus action"]

    def test_unknown_action(self):
        contact_id = _submit()

        with pytest.raises(ValidationError) as exc:
            current_domain.process(BulkUpdateContacts(contact_ids=[contact_id], action="shred"), asynchronous=False)
        assert exc.value.messages["action"] == ["Invalid action. Must be: updateStatus, delete, or archive"]

    def test_delete(self):
        ids = [_submit(subject=f"Question {n}") for n in range(2)]

        affected = current_domain.process(BulkUpdateContacts(contact_ids=ids, action="delete"), asynchronous=False)

        assert affected == 2
        assert contact_counts()["total"] == 0


class TestContactQueries:
    def test_list_filters_by_status_and_reports_counts(self):
        first = _submit(subject="Custom cake")
        _submit(subject="Delivery timing")
        current_domain.process(UpdateContactStatus(contact_id=first, status="resolved"), asynchronous=False)

        data, pagination, counts = list_contacts(status="unread")

        assert [contact["subject"] for contact in data] == ["Delivery timing"]
        assert pagination["totalItems"] == 1
        assert counts["total"] == 2
        assert counts["resolved"] == 1

    def test_search(self):
        _submit(subject="Custom cake")
        _submit(subject="Delivery timing", message="When do you deliver to Block C?")

        data, _, _ = list_contacts(search="block c")

        assert [contact["subject"] for contact in data] == ["Delivery timing"]

    def test_stats_count_recent_messages(self):
        _submit()
        _submit(subject="Another")

        stats = contact_stats()

        assert stats["total"] == 2
        assert stats["recent"] == 2
        assert stats["today"] == 2

    def test_by_email(self):
        _submit(email="asha@example.com")
        _submit(email="ravi@example.com")

        assert len(contacts_by_email("ASHA@example.com")) == 1
