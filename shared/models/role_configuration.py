from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from shared.core.database import Base
from shared.utils.datetime_utils import utcnow


class RoleConfiguration(Base):
    __tablename__ = "role_configurations"

    id = Column(Integer, primary_key=True, index=True)
    role_name = Column(String(50), unique=True, nullable=False)
    display_name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    color_class = Column(String(20), nullable=False, default="bg-gray-500")
    icon_class = Column(String(50), nullable=False, default="User")
    is_active = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False,
                        default=utcnow, onupdate=utcnow)

    permissions = relationship(
        "RolePermission",
        back_populates="role_configuration",
        cascade="all, delete-orphan",
        passive_deletes=True
    )
    routes = relationship(
        "RoleRoute",
        back_populates="role_configuration",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="RoleRoute.sort_order"
    )


class RolePermission(Base):
    __tablename__ = "role_permissions"
    __table_args__ = (
        UniqueConstraint("role_configuration_id", "permission_name"),
    )

    id = Column(Integer, primary_key=True, index=True)
    role_configuration_id = Column(
        Integer,
        ForeignKey("role_configurations.id", ondelete="CASCADE"),
        nullable=False
    )
    permission_name = Column(String(100), nullable=False)
    description = Column(String(200), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    role_configuration = relationship(
        "RoleConfiguration", back_populates="permissions")


class RoleRoute(Base):
    __tablename__ = "role_routes"
    __table_args__ = (
        UniqueConstraint("role_configuration_id", "route_path"),
    )

    id = Column(Integer, primary_key=True, index=True)
    role_configuration_id = Column(
        Integer,
        ForeignKey("role_configurations.id", ondelete="CASCADE"),
        nullable=False
    )
    route_path = Column(String(200), nullable=False)
    route_label = Column(String(100), nullable=False)
    icon_name = Column(String(50), nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)

    role_configuration = relationship(
        "RoleConfiguration", back_populates="routes")
