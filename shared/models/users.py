from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from passlib.context import CryptContext

from shared.core.database import Base
from shared.utils.datetime_utils import utcnow

bcrypt_context = CryptContext(schemes=['bcrypt'], deprecated='auto')


class Users(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)

    email = Column(String(200), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)

    phone_number = Column(String(20), nullable=True)
    extension = Column(String(20), nullable=True)
    department = Column(String(100), nullable=True)
    role = Column(String(20), nullable=False, default="staff")
    role_configuration_id = Column(
        Integer,
        ForeignKey("role_configurations.id", ondelete="SET NULL"),
        nullable=True
    )
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False,
                        default=utcnow, onupdate=utcnow)

    role_configuration = relationship("RoleConfiguration")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def set_password(self, password: str):
        self.password = bcrypt_context.hash(password)

    def verify_password(self, password: str) -> bool:
        return bcrypt_context.verify(password, self.password)
