import json

from shared.data.seed_data import seed_all
from shared.models.email_template import EmailTemplate
from shared.models.locations import Location
from shared.models.staff_members import StaffMember
from shared.models.users import Users
from visitor_service.app.models.system_settings import SystemSettings


def test_seed_populates_empty_database(db):
    summary = seed_all(db)

    assert summary == {
        "role_configurations": 3,
        "locations": 3,
        "users": 5,
        "staff_members": 3,
        "system_settings": 4,
        "email_templates": 6,
    }


def test_seed_is_idempotent(db):
    seed_all(db)

    assert set(seed_all(db).values()) == {0}
    assert db.query(Users).count() == 5


def test_seeded_accounts(db):
    seed_all(db)

    admin = db.query(Users).filter(Users.email == "admin@company.com").one()
    assert admin.verify_password("Admin123!")
    assert admin.role_configuration.role_name == "admin"

    john = db.query(StaffMember).filter(StaffMember.email == "john@company.com").one()
    assert john.can_login
    assert john.location.registration_url == "main-office"
    assert john.verify_password("Welcome!23")


def test_seeded_settings_and_templates(db):
    seed_all(db)

    purposes = db.query(SystemSettings).filter(
        SystemSettings.key == "PurposeOfVisitOptions").one()
    assert "Interview" in json.loads(purposes.value)
    assert db.query(EmailTemplate).filter(EmailTemplate.is_active == True).count() == 6
    assert {l.name for l in db.query(Location).all()} == \
        {"Main Office", "Corporate Office", "Research Lab"}
