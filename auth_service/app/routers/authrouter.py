from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core import auth
from shared.core.database import get_db
from shared.core.schemas import UserToken
from ..schemas import authschema
from ..services import authservices

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=authschema.LoginResponse)
def login(
        request: authschema.LoginRequest,
        db: Session = Depends(get_db)):
    return authservices.login(db, request)


@router.get("/me", response_model=authschema.CurrentUser)
def me(current_user: UserToken = Depends(auth.validate_current_token)):
    return authschema.CurrentUser.model_validate(current_user.model_dump())
