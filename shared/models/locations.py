from sqlalchemy import Boolean, Column, DateTime, Integer, String

from shared.core.database import Base
from shared.utils.datetime_utils import utcnow


class Location(Base):
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    address = Column(String(500), nullable=False)
    description = Column(String(1000), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    # slug used by the kiosk registration page, e.g. "main-office"
    registration_url = Column(
        String(100), unique=True, index=True, nullable=False)
    qr_code_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False,
                        default=utcnow, onupdate=utcnow)
