from sqlalchemy import Column, DateTime, Integer, String, Text

from shared.core.database import Base
from shared.utils.datetime_utils import utcnow


class SystemSettings(Base):
    __tablename__ = "system_settings"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(100), unique=True, nullable=False, index=True)
    value = Column(Text, nullable=False, default="")
    description = Column(String(200), nullable=True)
    updated_at = Column(DateTime, nullable=False,
                        default=utcnow, onupdate=utcnow)
