"""Demo data for a fresh database.

Each seeder only inserts rows whose natural key is missing, so running it
against an already seeded database is a no-op.
"""
import json
import logging
from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.core.database import Base, SessionLocal, engine
from shared.data.email_templates import DEFAULT_TEMPLATES
from shared.models.email_template import EmailTemplate
from shared.models.locations import Location
from shared.models.role_configuration import RoleConfiguration
from shared.models.staff_members import StaffMember
from shared.models.users import Users
from visitor_service.app.crud.location_crud import qr_code_url
from visitor_service.app.crud.role_configuration_crud import seed_default_role_configurations
from visitor_service.app.models.system_settings import SystemSettings

logger = logging.getLogger(__name__)

MAIN_OFFICE = "main-office"

SEED_USERS = [
    {"first_name": "Super", "last_name": "Admin", "email": "superadmin@company.com",
     "phone_number": "+1 (555) 100-1000", "extension": "1000", "role": "admin", "password": "Welcome!23"},
    {"first_name": "System", "last_name": "Administrator", "email": "admin@company.com",
     "phone_number": "+1 (555) 100-1002", "extension": "1002", "role": "admin", "password": "Admin123!"},
    {"first_name": "Sarah", "last_name": "Johnson", "email": "reception@company.com",
     "phone_number": "+1 (555) 100-1001", "extension": "1001", "role": "reception", "password": "Reception123!"},
    {"first_name": "Emily", "last_name": "Watson", "email": "emily.watson@company.com",
     "phone_number": "+1 (555) 100-1003", "extension": "1003", "role": "staff", "department": "Engineering",
     "password": "Staff123!"},
    {"first_name": "John", "last_name": "Reception", "email": "john@company.com",
     "phone_number": "+1 (555) 100-1004", "extension": "1004", "role": "reception", "password": "Welcome!23"},
]

SEED_LOCATIONS = [
    {"name": "Main Office", "registration_url": MAIN_OFFICE,
     "address": "123 Business Ave, Suite 100, New York, NY 10001",
     "description": "Corporate headquarters and main reception"},
    {"name": "Corporate Office", "registration_url": "corporate-office",
     "address": "789 Corporate Blvd, Tower A, New York, NY 10003",
     "description": "Executive offices and boardroom facilities"},
    {"name": "Research Lab", "registration_url": "research-lab",
     "address": "456 Innovation Dr, Building B, New York, NY 10002",
     "description": "R&D facility and testing center"},
]

SEED_STAFF = [
    {"first_name": "John", "last_name": "Reception", "email": "john@company.com", "password": "Welcome!23",
     "mobile_number": "+1234567890", "phone_number": "+1234567890", "extension": "1004",
     "designation": "Receptionist", "role": "reception"},
    {"first_name": "Sarah", "last_name": "Johnson", "email": "reception@company.com", "password": "Reception123!",
     "mobile_number": "+1555100001", "phone_number": "+1555100001", "extension": "1001",
     "designation": "Senior Receptionist", "role": "reception"},
    {"first_name": "Emily", "last_name": "Watson", "email": "emily.watson@company.com", "password": "Staff123!",
     "mobile_number": "+1555100003", "phone_number": "+1555100003", "extension": "1003",
     "designation": "Software Engineer", "role": "staff"},
]

SEED_SETTINGS = [
    ("PurposeOfVisitOptions",
     json.dumps(["Business Meeting", "Interview", "Consultation",
                "Delivery", "Maintenance", "Training", "Other"]),
     "Available purpose of visit options"),
    ("IdTypeOptions",
     json.dumps(["Driver's License", "Passport", "National ID",
                "Employee ID", "Student ID"]),
     "Available ID proof types"),
    ("IsPhotoMandatory", "false", "Whether visitor photo is mandatory"),
    ("EnabledFields",
     json.dumps({"email": True, "companyName": True,
                "idProof": True, "photo": True}, separators=(",", ":")),
     "Enabled form fields"),
]


def seed_locations(db: Session) -> int:
    added = 0
    for item in SEED_LOCATIONS:
        exists = db.query(Location.id).filter(
            Location.registration_url == item["registration_url"]).first()
        if exists:
            continue
        db.add(Location(**item, is_active=True,
               qr_code_url=qr_code_url(item["registration_url"])))
        added += 1
    db.commit()
    return added


def seed_users(db: Session) -> int:
    role_ids = {
        name: role_id for role_id, name in
        db.query(RoleConfiguration.id, func.lower(RoleConfiguration.role_name))
        .filter(RoleConfiguration.is_active == True).all()
    }

    added = 0
    for item in SEED_USERS:
        data = dict(item)
        password = data.pop("password")
        user = db.query(Users).filter(
            func.lower(Users.email) == data["email"]).first()
        if user:
            # existing accounts only get their missing role link filled in
            if user.role_configuration_id is None:
                user.role_configuration_id = role_ids.get(user.role)
            continue

        user = Users(**data, is_active=True,
                     role_configuration_id=role_ids.get(data["role"]))
        user.set_password(password)
        db.add(user)
        added += 1
    db.commit()
    return added


def seed_staff_members(db: Session) -> int:
    location = db.query(Location).filter(
        Location.registration_url == MAIN_OFFICE).first()
    if not location:
        logger.warning("Main Office location missing, skipping staff seed")
        return 0

    added = 0
    for item in SEED_STAFF:
        data = dict(item)
        password = data.pop("password")
        exists = db.query(StaffMember.id).filter(
            func.lower(StaffMember.email) == data["email"]).first()
        if exists:
            continue

        staff = StaffMember(**data, location_id=location.id,
                            is_active=True, can_login=True)
        staff.set_password(password)
        db.add(staff)
        added += 1
    db.commit()
    return added


def seed_system_settings(db: Session) -> int:
    added = 0
    for key, value, description in SEED_SETTINGS:
        exists = db.query(SystemSettings.id).filter(
            SystemSettings.key == key).first()
        if exists:
            continue
        db.add(SystemSettings(key=key, value=value, description=description))
        added += 1
    db.commit()
    return added


def seed_email_templates(db: Session) -> int:
    added = 0
    for template_type, (name, subject, body) in DEFAULT_TEMPLATES.items():
        exists = db.query(EmailTemplate.id).filter(
            EmailTemplate.template_type == template_type.value).first()
        if exists:
            continue
        db.add(EmailTemplate(name=name, subject=subject, body=body,
                             template_type=template_type.value, is_active=True))
        added += 1
    db.commit()
    return added


def seed_all(db: Session) -> dict:
    """Run every seeder in dependency order. Returns rows added per entity."""
    summary = {
        "role_configurations": seed_default_role_configurations(db),
        "locations": seed_locations(db),
        "users": seed_users(db),
        "staff_members": seed_staff_members(db),
        "system_settings": seed_system_settings(db),
        "email_templates": seed_email_templates(db),
    }
    logger.info(f"Seed complete: {summary}")
    return summary


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        seed_all(db)
    except Exception:
        db.rollback()
        logger.exception("Seeding failed")
        raise
    finally:
        db.close()
