from datetime import datetime

from fastapi import BackgroundTasks

from shared.helpers.email_helper import EmailHelper
from shared.models.email_template import EmailTemplate
from shared.utils.enums import EmailTemplateType
from visitor_service.app.crud import notification_crud
from visitor_service.app.enum.visitor_enum import VisitorStatus


def test_render_substitutes_placeholders():
    rendered = EmailHelper.render(
        "Hello {{VisitorName}}, see {{StaffName}}", {"VisitorName": "Jane", "StaffName": "Bob"})

    assert rendered == "Hello Jane, see Bob"


def test_render_drops_blocks_for_missing_values():
    template = "A{{#if Notes}} notes: {{Notes}}{{/if}}B{{#if IdProofType}} id{{/if}}"

    assert EmailHelper.render(template, {"Notes": "bring laptop", "IdProofType": "Not provided"}) == \
        "A notes: bring laptopB"
    assert EmailHelper.render(template, {"Notes": ""}) == "AB"


def test_database_template_overrides_default(db):
    db.add(EmailTemplate(
        name="Custom approval",
        subject="Approved: {{VisitorName}}",
        body="<p>{{VisitorName}}</p>",
        template_type=EmailTemplateType.VISITOR_APPROVAL_CONFIRMATION.value,
        is_active=True,
    ))
    db.commit()

    subject, body = EmailHelper().build_email(
        db, EmailTemplateType.VISITOR_APPROVAL_CONFIRMATION, {"VisitorName": "Jane"})

    assert subject == "Approved: Jane"
    assert body == "<p>Jane</p>"


def test_default_template_used_when_none_stored(db):
    subject, _ = EmailHelper().build_email(
        db, EmailTemplateType.VISITOR_REJECTION_NOTICE, {"LocationName": "Main Office"})

    assert subject == "Your visit request to Main Office requires attention"


def test_find_staff_prefers_full_name_then_email(db, make_location, make_staff):
    location = make_location()
    bob = make_staff(location, first_name="Bob", last_name="Smith", email="bob@company.com")
    make_staff(location, first_name="Smith", last_name="Jones", email="sj@company.com")

    assert notification_crud.find_staff_for_visit(db, "bob smith").id == bob.id
    assert notification_crud.find_staff_for_visit(db, "BOB@company.com").id == bob.id
    assert notification_crud.find_staff_for_visit(db, "Bob").id == bob.id
    assert notification_crud.find_staff_for_visit(db, "Nobody") is None


def test_find_staff_tiers_and_inactive(db, make_location, make_staff):
    location = make_location()
    first_name_only = make_staff(location, first_name="Bob", last_name="Jones", email="bj@company.com")
    full_match = make_staff(location, first_name="Bob", last_name="Smith", email="bs@company.com")
    retired = make_staff(location, first_name="Carol", last_name="King", email="ck@company.com")
    retired.is_active = False
    db.commit()

    assert notification_crud.find_staff_for_visit(db, "  Bob Smith ").id == full_match.id
    assert notification_crud.find_staff_for_visit(db, "bob").id == first_name_only.id
    assert notification_crud.find_staff_for_visit(db, "Carol King") is None
    assert notification_crud.find_staff_for_visit(db, "") is None


def _run(tasks: BackgroundTasks):
    for task in tasks.tasks:
        task.func(*task.args, **task.kwargs)


def test_registration_notifies_host_with_links(db, make_location, make_staff, make_visitor, sent_emails):
    location = make_location()
    make_staff(location, email="bob@company.com")
    visitor = make_visitor(location, whom_to_meet="Bob Smith",
                           date_time=datetime(2025, 1, 1, 9, 0))
    tasks = BackgroundTasks()

    assert notification_crud.notify_staff_of_registration(tasks, db, visitor)
    _run(tasks)

    assert len(sent_emails) == 1
    mail = sent_emails[0]
    assert mail["recipients"] == ["bob@company.com"]
    assert mail["subject"] == "New Visitor Request - Jane Doe wants to meet you"
    assert mail["high_priority"] is True
    assert f"/api/visitors/{visitor.id}/approve?token=" in mail["html_body"]
    assert f"/api/visitors/{visitor.id}/reject?token=" in mail["html_body"]
    assert "Wednesday, January 01, 2025 at 09:00 AM" in mail["html_body"]
    assert "{{" not in mail["html_body"]


def test_unknown_host_falls_back_to_location_admins(
        db, make_location, make_staff, make_visitor, sent_emails):
    location = make_location()
    make_staff(location, first_name="Ada", last_name="Admin", email="ada@company.com", role="admin")
    visitor = make_visitor(location, whom_to_meet="Somebody Else")
    tasks = BackgroundTasks()

    notification_crud.notify_staff_of_registration(tasks, db, visitor)
    _run(tasks)

    assert [m["recipients"] for m in sent_emails] == [["ada@company.com"]]


def test_nobody_to_notify(db, make_location, make_visitor, sent_emails):
    visitor = make_visitor(make_location(), whom_to_meet="Somebody Else")
    tasks = BackgroundTasks()

    assert notification_crud.notify_staff_of_registration(tasks, db, visitor) is False
    assert tasks.tasks == []


def test_rejection_goes_to_visitor_with_default_reason(db, make_location, make_visitor, sent_emails):
    visitor = make_visitor(make_location(), status=VisitorStatus.REJECTED)
    tasks = BackgroundTasks()

    notification_crud.notify_status_change(tasks, db, visitor, VisitorStatus.REJECTED)
    _run(tasks)

    assert sent_emails[0]["recipients"] == ["jane@example.com"]
    assert notification_crud.DEFAULT_REJECTION_REASON in sent_emails[0]["html_body"]


def test_status_change_without_visitor_email_is_skipped(db, make_location, make_visitor, sent_emails):
    visitor = make_visitor(make_location(), status=VisitorStatus.APPROVED, email=None)
    tasks = BackgroundTasks()

    assert notification_crud.notify_status_change(
        tasks, db, visitor, VisitorStatus.APPROVED) is False
    assert tasks.tasks == []


def test_awaiting_approval_sends_nothing(db, make_location, make_visitor):
    visitor = make_visitor(make_location())
    tasks = BackgroundTasks()

    assert notification_crud.notify_status_change(
        tasks, db, visitor, VisitorStatus.AWAITING_APPROVAL) is False


def test_render_escapes_values_when_asked():
    template = '<p>{{VisitorName}}</p><a href="{{ApprovalUrl}}">Approve</a>'
    data = {"VisitorName": "<b>Jane</b>", "ApprovalUrl": "http://visitors.test/a?token=x&y=1"}

    assert EmailHelper.render(template, data, escape=True) == \
        '<p>&lt;b&gt;Jane&lt;/b&gt;</p><a href="http://visitors.test/a?token=x&y=1">Approve</a>'
    assert EmailHelper.render("{{VisitorName}}", data) == "<b>Jane</b>"


def test_visitor_markup_is_escaped_in_staff_email(db, make_location, make_staff, make_visitor, sent_emails):
    location = make_location()
    make_staff(location, email="bob@company.com")
    visitor = make_visitor(location, whom_to_meet="Bob Smith",
                           full_name="<a href='http://evil.example/approve'>click</a>")
    visitor.purpose_of_visit = "<img src='http://evil.example/track.png'>"
    db.commit()
    tasks = BackgroundTasks()

    notification_crud.notify_staff_of_registration(tasks, db, visitor)
    _run(tasks)

    body = sent_emails[0]["html_body"]
    assert "&lt;a href=&#x27;http://evil.example/approve&#x27;&gt;" in body
    assert "<a href='http://evil.example" not in body
    assert "<img src='http://evil.example" not in body
    assert f"/api/visitors/{visitor.id}/approve?token=" in body
    assert sent_emails[0]["subject"].startswith(
        "New Visitor Request - <a href='http://evil.example/approve'>click</a>")
