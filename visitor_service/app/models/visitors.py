from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from shared.core.database import Base
from shared.utils.datetime_utils import utcnow
from ..enum.visitor_enum import VisitorStatus


class Visitor(Base):
    __tablename__ = "visitors"

    id = Column(Integer, primary_key=True, index=True)
    location_id = Column(
        Integer,
        ForeignKey("locations.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )
    full_name = Column(String(200), nullable=False)
    phone_number = Column(String(20), nullable=False)
    email = Column(String(200), nullable=True)
    company_name = Column(String(200), nullable=True)
    purpose_of_visit = Column(String(200), nullable=False)
    whom_to_meet = Column(String(200), nullable=False, index=True)
    # scheduled visit time (naive UTC)
    date_time = Column(DateTime, nullable=False, index=True)
    id_proof_type = Column(String(50), nullable=True)
    id_proof_number = Column(String(100), nullable=True)
    photo_url = Column(String(500), nullable=True)
    status = Column(
        String(30),
        nullable=False,
        default=VisitorStatus.AWAITING_APPROVAL.value,
        index=True
    )
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow)
    approved_by = Column(String(200), nullable=True)
    approved_at = Column(DateTime, nullable=True)
    check_in_time = Column(DateTime, nullable=True)
    check_out_time = Column(DateTime, nullable=True)
    notes = Column(String(1000), nullable=True)
    version = Column(Integer, nullable=False)

    location = relationship("Location", lazy="joined")
    custom_field_values = relationship(
        "VisitorCustomFieldValue",
        back_populates="visitor",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    # concurrent writes on the same row raise StaleDataError
    __mapper_args__ = {"version_id_col": version}

    @property
    def location_name(self) -> str:
        return self.location.name if self.location else ""

    @property
    def custom_fields(self) -> dict:
        return {
            v.custom_field.name: v.value
            for v in self.custom_field_values
            if v.custom_field is not None
        }
