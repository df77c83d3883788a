from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from shared.core.database import Base
from shared.utils.datetime_utils import utcnow


class CustomField(Base):
    __tablename__ = "custom_fields"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    type = Column(String(20), nullable=False, default="text")
    label = Column(String(200), nullable=False)
    placeholder = Column(String(200), nullable=True)
    required = Column(Boolean, nullable=False, default=False)
    options = Column(Text, nullable=True)  # JSON list for select fields
    order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False,
                        default=utcnow, onupdate=utcnow)

    values = relationship(
        "VisitorCustomFieldValue",
        back_populates="custom_field",
        cascade="all, delete-orphan",
        passive_deletes=True
    )


class VisitorCustomFieldValue(Base):
    __tablename__ = "visitor_custom_field_values"

    id = Column(Integer, primary_key=True, index=True)
    visitor_id = Column(
        Integer,
        ForeignKey("visitors.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    custom_field_id = Column(
        Integer,
        ForeignKey("custom_fields.id", ondelete="CASCADE"),
        nullable=False
    )
    value = Column(String(1000), nullable=True)

    visitor = relationship("Visitor", back_populates="custom_field_values")
    custom_field = relationship(
        "CustomField", back_populates="values", lazy="joined")
