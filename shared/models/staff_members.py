from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from shared.core.database import Base
from shared.utils.datetime_utils import utcnow
from .users import bcrypt_context


class StaffMember(Base):
    __tablename__ = "staff_members"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    location_id = Column(
        Integer,
        ForeignKey("locations.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )
    email = Column(String(200), unique=True, index=True, nullable=False)
    mobile_number = Column(String(20), nullable=False, default="")
    phone_number = Column(String(20), nullable=False, default="")
    extension = Column(String(10), nullable=False, default="")
    designation = Column(String(100), nullable=True)
    password = Column(String(200), nullable=True)
    role = Column(String(50), nullable=False, default="staff")
    can_login = Column(Boolean, nullable=False, default=False)
    photo_url = Column(String(500), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False,
                        default=utcnow, onupdate=utcnow)

    location = relationship("Location")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def location_name(self) -> str | None:
        return self.location.name if self.location else None

    def set_password(self, password: str):
        self.password = bcrypt_context.hash(password)

    def verify_password(self, password: str) -> bool:
        if not self.password:
            return False
        return bcrypt_context.verify(password, self.password)
