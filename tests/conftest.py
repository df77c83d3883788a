import os

# settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["EMAIL_ENABLED"] = "false"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["APP_BASE_URL"] = "http://visitors.test"

import pytest
from fastapi.testclient import TestClient

from shared.core.auth import create_access_token
from shared.core.database import Base, SessionLocal, engine
from shared.helpers.email_helper import EmailHelper
from shared.models.locations import Location
from shared.models.staff_members import StaffMember
from shared.models.users import Users
from shared.utils.datetime_utils import utcnow
from visitor_service.app.enum.visitor_enum import VisitorStatus
from visitor_service.app.main import app as visitor_app
from visitor_service.app.models.visitors import Visitor
from auth_service.app.main import app as auth_app


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(visitor_app)


@pytest.fixture
def auth_client():
    return TestClient(auth_app)


@pytest.fixture
def sent_emails(monkeypatch):
    """Captures outgoing mail instead of talking to SMTP."""
    sent = []

    def fake_send(self, recipients, subject, html_body, high_priority=False):
        sent.append({"recipients": recipients, "subject": subject,
                     "html_body": html_body, "high_priority": high_priority})
        return True

    monkeypatch.setattr(EmailHelper, "send_email", fake_send)
    return sent


@pytest.fixture
def make_location(db):
    def _make(name="Main Office", slug=None, is_active=True):
        location = Location(
            name=name,
            address="123 Business Ave",
            registration_url=slug or name.lower().replace(" ", "-"),
            is_active=is_active,
        )
        db.add(location)
        db.commit()
        db.refresh(location)
        return location
    return _make


@pytest.fixture
def make_staff(db):
    def _make(location, first_name="Bob", last_name="Smith", email=None, role="staff",
              password=None, can_login=False):
        staff = StaffMember(
            first_name=first_name,
            last_name=last_name,
            email=email or f"{first_name}.{last_name}@company.com".lower(),
            location_id=location.id,
            role=role,
            can_login=can_login,
        )
        if password:
            staff.set_password(password)
        db.add(staff)
        db.commit()
        db.refresh(staff)
        return staff
    return _make


@pytest.fixture
def make_user(db):
    def _make(email="admin@company.com", password="Admin123!", role="admin",
              first_name="System", last_name="Administrator", is_active=True):
        user = Users(first_name=first_name, last_name=last_name,
                     email=email, role=role, is_active=is_active)
        user.set_password(password)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def make_visitor(db):
    def _make(location, status=VisitorStatus.AWAITING_APPROVAL, whom_to_meet="Bob Smith",
              date_time=None, full_name="Jane Doe", email="jane@example.com"):
        now = utcnow()
        visitor = Visitor(
            location_id=location.id,
            full_name=full_name,
            phone_number="+15551234567",
            email=email,
            purpose_of_visit="Interview",
            whom_to_meet=whom_to_meet,
            date_time=date_time or now,
            status=status.value,
            created_at=now,
            updated_at=now,
        )
        db.add(visitor)
        db.commit()
        db.refresh(visitor)
        return visitor
    return _make


def bearer(role="admin", user_id="1", email=None, name="Test User", location_id=None,
           account_type="user"):
    token = create_access_token({
        "user_id": user_id,
        "email": email,
        "name": name,
        "role": role,
        "location_id": location_id,
        "account_type": account_type,
    })
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    return bearer(role="admin", email="admin@company.com", name="System Administrator")


@pytest.fixture
def headers():
    """Builds an Authorization header for arbitrary claims."""
    return bearer
