# Import all models to ensure they are registered with SQLAlchemy
from .visitors import Visitor
from .custom_fields import CustomField, VisitorCustomFieldValue
from .system_settings import SystemSettings
