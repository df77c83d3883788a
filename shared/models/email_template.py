from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from shared.core.database import Base
from shared.utils.datetime_utils import utcnow


class EmailTemplate(Base):
    __tablename__ = "email_templates"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    subject = Column(String(500), nullable=False)
    body = Column(Text, nullable=False)
    # one of shared.utils.enums.EmailTemplateType
    template_type = Column(String(50), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False,
                        default=utcnow, onupdate=utcnow)
