import logging
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin
from shared.core.database import get_db
from shared.helpers.email_helper import EmailHelper
from ..crud import settings_crud as crud
from ..schemas.settings_schemas import EmailTestRequest, SettingOut, SettingUpsert

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("", response_model=List[SettingOut])
def get_settings(db: Session = Depends(get_db)):
    return crud.get_settings(db)


@router.get("/{key}", response_model=SettingOut)
def get_setting(key: str, db: Session = Depends(get_db)):
    return crud.get_setting(db, key)


@router.put("/{key}", response_model=SettingOut, dependencies=[Depends(allow_admin)])
def upsert_setting(key: str, data: SettingUpsert, db: Session = Depends(get_db)):
    return crud.upsert_setting(db, key, data)


@router.post("/test-email", response_model=bool, dependencies=[Depends(allow_admin)])
def send_test_email(data: EmailTestRequest):
    # sent inline so the admin sees whether SMTP works
    logger.info(f"Sending test email to {data.to_email}")
    return EmailHelper().send_email([data.to_email], data.subject, f"<p>{data.body}</p>")
