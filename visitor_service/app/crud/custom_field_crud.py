import json
from typing import List
from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.utils.datetime_utils import utcnow
from shared.utils.exceptions import DuplicateError, NotFoundError
from ..models.custom_fields import CustomField
from ..schemas.custom_field_schemas import CustomFieldCreate, CustomFieldOut, CustomFieldUpdate


def _get_field(db: Session, field_id: int) -> CustomField:
    field = db.query(CustomField).filter(CustomField.id == field_id).first()
    if not field:
        raise NotFoundError("Custom field not found")
    return field


def _ensure_unique_name(db: Session, name: str, exclude_id: int = None):
    query = db.query(CustomField.id).filter(
        func.lower(CustomField.name) == name.lower())
    if exclude_id is not None:
        query = query.filter(CustomField.id != exclude_id)
    if query.first():
        raise DuplicateError(f"Custom field '{name}' already exists")


def get_custom_fields(db: Session, include_inactive: bool = False) -> List[CustomFieldOut]:
    query = db.query(CustomField)
    if not include_inactive:
        query = query.filter(CustomField.is_active == True)
    fields = query.order_by(CustomField.order, CustomField.id).all()
    return [CustomFieldOut.model_validate(f) for f in fields]


def get_custom_field(db: Session, field_id: int) -> CustomFieldOut:
    return CustomFieldOut.model_validate(_get_field(db, field_id))


def create_custom_field(db: Session, data: CustomFieldCreate) -> CustomFieldOut:
    _ensure_unique_name(db, data.name)

    field = CustomField(
        **data.model_dump(exclude={"options", "type"}),
        type=data.type.value,
        options=json.dumps(data.options) if data.options else None,
    )
    db.add(field)
    db.commit()
    db.refresh(field)
    return CustomFieldOut.model_validate(field)


def update_custom_field(db: Session, field_id: int, data: CustomFieldUpdate) -> CustomFieldOut:
    field = _get_field(db, field_id)
    _ensure_unique_name(db, data.name, exclude_id=field_id)

    for key, value in data.model_dump(exclude={"options", "type"}).items():
        setattr(field, key, value)
    field.type = data.type.value
    field.options = json.dumps(data.options) if data.options else None
    field.updated_at = utcnow()

    db.commit()
    db.refresh(field)
    return CustomFieldOut.model_validate(field)


def delete_custom_field(db: Session, field_id: int) -> None:
    # stored visitor values go with the field
    field = _get_field(db, field_id)
    db.delete(field)
    db.commit()
