import logging
from typing import List
from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.models.role_configuration import RoleConfiguration, RolePermission, RoleRoute
from shared.models.users import Users
from shared.utils.datetime_utils import utcnow
from shared.utils.exceptions import ConflictError, DuplicateError, NotFoundError
from ..schemas.role_configuration_schemas import (
    RoleConfigurationCreate, RoleConfigurationOut, RoleConfigurationUpdate,
    RolePermissionOut, RoleRouteOut
)

logger = logging.getLogger(__name__)

# grants every permission when present on a role
ALL_PERMISSIONS = "all"

DEFAULT_ROLE_CONFIGURATIONS = [
    {
        "role_name": "reception",
        "display_name": "Receptionist",
        "description": "Front desk staff responsible for visitor registration and management",
        "color_class": "bg-blue-500",
        "icon_class": "Users",
        "sort_order": 1,
        "permissions": [
            ("visitor_registration", "Register new visitors"),
            ("visitor_management", "Manage visitor check-in/out"),
            ("view_statistics", "View visitor statistics"),
        ],
        "routes": [
            ("/register", "Register Visitor", "UserPlus", 1),
            ("/reception", "Reception Dashboard", "Users", 2),
        ],
    },
    {
        "role_name": "admin",
        "display_name": "Administrator",
        "description": "System administrator with full access to all features",
        "color_class": "bg-purple-500",
        "icon_class": "Shield",
        "sort_order": 2,
        "permissions": [
            (ALL_PERMISSIONS, "Full system access"),
            ("user_management", "Manage system users"),
            ("system_settings", "Configure system settings"),
            ("location_management", "Manage locations"),
            ("staff_management", "Manage staff members"),
        ],
        "routes": [
            ("/register", "Register Visitor", "UserPlus", 1),
            ("/admin", "Admin Dashboard", "Shield", 2),
            ("/settings", "Settings", "Settings", 3),
        ],
    },
    {
        "role_name": "staff",
        "display_name": "Staff Member",
        "description": "Regular staff member who can approve/reject visitor requests",
        "color_class": "bg-green-500",
        "icon_class": "UserCheck",
        "sort_order": 3,
        "permissions": [
            ("approve_visitors", "Approve visitor requests"),
            ("reject_visitors", "Reject visitor requests"),
            ("view_visitors", "View visitor information"),
        ],
        "routes": [
            ("/register", "Register Visitor", "UserPlus", 1),
            ("/approval", "Approvals", "UserCheck", 2),
        ],
    },
]


def _to_out(role: RoleConfiguration) -> RoleConfigurationOut:
    out = RoleConfigurationOut.model_validate(role)
    out.permissions = [p for p in out.permissions if p.is_active]
    out.routes = sorted(
        [r for r in out.routes if r.is_active], key=lambda r: r.sort_order)
    return out


def _get_role(db: Session, role_id: int) -> RoleConfiguration:
    role = db.query(RoleConfiguration).filter(
        RoleConfiguration.id == role_id).first()
    if not role:
        raise NotFoundError("Role configuration not found")
    return role


def _replace_children(db: Session, role: RoleConfiguration, data: RoleConfigurationCreate):
    if role.id is not None:
        # flush the removals first, the new rows may reuse the same names
        role.permissions.clear()
        role.routes.clear()
        db.flush()

    # first occurrence wins
    permissions, routes = {}, {}
    for p in data.permissions:
        permissions.setdefault(p.permission_name.lower(), p)
    for r in data.routes:
        routes.setdefault(r.route_path, r)
    role.permissions = [
        RolePermission(permission_name=p.permission_name,
                       description=p.description, is_active=True)
        for p in permissions.values()
    ]
    role.routes = [
        RoleRoute(route_path=r.route_path, route_label=r.route_label,
                  icon_name=r.icon_name, sort_order=r.sort_order, is_active=True)
        for r in routes.values()
    ]


def get_role_configurations(db: Session) -> List[RoleConfigurationOut]:
    roles = db.query(RoleConfiguration).order_by(
        RoleConfiguration.sort_order, RoleConfiguration.id).all()
    return [_to_out(r) for r in roles]


def get_role_configuration(db: Session, role_id: int) -> RoleConfigurationOut:
    return _to_out(_get_role(db, role_id))


def get_role_configuration_by_name(db: Session, role_name: str) -> RoleConfigurationOut:
    role = db.query(RoleConfiguration).filter(
        func.lower(RoleConfiguration.role_name) == role_name.lower(),
        RoleConfiguration.is_active == True
    ).first()
    if not role:
        raise NotFoundError("Role configuration not found")
    return _to_out(role)


def create_role_configuration(db: Session, data: RoleConfigurationCreate) -> RoleConfigurationOut:
    existing = db.query(RoleConfiguration.id).filter(
        func.lower(RoleConfiguration.role_name) == data.role_name.lower()).first()
    if existing:
        raise DuplicateError(
            f"Role configuration with name '{data.role_name}' already exists")

    now = utcnow()
    role = RoleConfiguration(
        **data.model_dump(exclude={"permissions", "routes"}),
        created_at=now,
        updated_at=now,
    )
    _replace_children(db, role, data)
    db.add(role)
    db.commit()
    db.refresh(role)
    logger.info(f"Role configuration '{role.role_name}' created")
    return _to_out(role)


def update_role_configuration(db: Session, role_id: int, data: RoleConfigurationUpdate) -> RoleConfigurationOut:
    """Update display fields and replace the permission and route sets.

    The role name is the lookup key for tokens and is left unchanged.
    """
    role = _get_role(db, role_id)

    for key, value in data.model_dump(exclude={"role_name", "permissions", "routes"}).items():
        setattr(role, key, value)
    role.updated_at = utcnow()

    _replace_children(db, role, data)
    db.commit()
    db.refresh(role)
    return _to_out(role)


def delete_role_configuration(db: Session, role_id: int) -> None:
    role = _get_role(db, role_id)

    in_use = db.query(Users.id).filter(
        Users.role_configuration_id == role_id).first()
    if in_use:
        raise ConflictError(
            "Cannot delete role configuration that is assigned to users")

    db.delete(role)
    db.commit()
    logger.info(f"Role configuration {role_id} deleted")


def set_role_configuration_active(db: Session, role_id: int, is_active: bool) -> RoleConfigurationOut:
    role = _get_role(db, role_id)
    role.is_active = is_active
    role.updated_at = utcnow()
    db.commit()
    db.refresh(role)
    return _to_out(role)


def get_role_permissions(db: Session, role_id: int) -> List[RolePermissionOut]:
    _get_role(db, role_id)
    rows = db.query(RolePermission).filter(
        RolePermission.role_configuration_id == role_id,
        RolePermission.is_active == True
    ).order_by(RolePermission.id).all()
    return [RolePermissionOut.model_validate(r) for r in rows]


def get_role_routes(db: Session, role_id: int) -> List[RoleRouteOut]:
    _get_role(db, role_id)
    rows = db.query(RoleRoute).filter(
        RoleRoute.role_configuration_id == role_id,
        RoleRoute.is_active == True
    ).order_by(RoleRoute.sort_order).all()
    return [RoleRouteOut.model_validate(r) for r in rows]


def has_permission(db: Session, role_name: str, permission_name: str) -> bool:
    names = (
        db.query(func.lower(RolePermission.permission_name))
        .join(RoleConfiguration, RolePermission.role_configuration_id == RoleConfiguration.id)
        .filter(
            func.lower(RoleConfiguration.role_name) == role_name.lower(),
            RoleConfiguration.is_active == True,
            RolePermission.is_active == True
        )
        .all()
    )
    granted = {n for (n,) in names}
    return ALL_PERMISSIONS in granted or permission_name.lower() in granted


def seed_default_role_configurations(db: Session) -> int:
    """Insert any default role that is missing. Returns how many were added."""
    added = 0
    for defaults in DEFAULT_ROLE_CONFIGURATIONS:
        exists = db.query(RoleConfiguration.id).filter(
            func.lower(RoleConfiguration.role_name) == defaults["role_name"]).first()
        if exists:
            continue

        role = RoleConfiguration(
            **{k: v for k, v in defaults.items() if k not in ("permissions", "routes")})
        role.permissions = [
            RolePermission(permission_name=name, description=desc)
            for name, desc in defaults["permissions"]
        ]
        role.routes = [
            RoleRoute(route_path=path, route_label=label,
                      icon_name=icon, sort_order=order)
            for path, label, icon, order in defaults["routes"]
        ]
        db.add(role)
        added += 1

    if added:
        db.commit()
        logger.info(f"Seeded {added} default role configurations")
    return added
