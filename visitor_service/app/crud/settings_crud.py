from typing import List
from sqlalchemy.orm import Session

from shared.utils.datetime_utils import utcnow
from shared.utils.exceptions import NotFoundError
from ..models.system_settings import SystemSettings
from ..schemas.settings_schemas import SettingOut, SettingUpsert


def get_settings(db: Session) -> List[SettingOut]:
    rows = db.query(SystemSettings).order_by(SystemSettings.key).all()
    return [SettingOut.model_validate(r) for r in rows]


def get_setting(db: Session, key: str) -> SettingOut:
    row = db.query(SystemSettings).filter(SystemSettings.key == key).first()
    if not row:
        raise NotFoundError(f"Setting '{key}' not found")
    return SettingOut.model_validate(row)


def upsert_setting(db: Session, key: str, data: SettingUpsert) -> SettingOut:
    row = db.query(SystemSettings).filter(SystemSettings.key == key).first()
    if row is None:
        row = SystemSettings(key=key)
        db.add(row)

    row.value = data.value
    if data.description is not None:
        row.description = data.description
    row.updated_at = utcnow()

    db.commit()
    db.refresh(row)
    return SettingOut.model_validate(row)
