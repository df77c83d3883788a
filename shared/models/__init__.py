# Import all models to ensure they are registered with SQLAlchemy
from .locations import Location
from .role_configuration import RoleConfiguration, RolePermission, RoleRoute
from .users import Users
from .staff_members import StaffMember
from .email_template import EmailTemplate
