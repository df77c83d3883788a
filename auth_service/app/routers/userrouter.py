from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin, validate_current_token
from shared.core.database import get_db
from ..schemas import userschema
from ..services import userservices

router = APIRouter(prefix="/api/auth", tags=["Users"])


@router.post("/register", response_model=userschema.UserOut,
             status_code=status.HTTP_201_CREATED, dependencies=[Depends(allow_admin)])
def register(new_user: userschema.UserCreate, db: Session = Depends(get_db)):
    return userservices.create_user(db, new_user)


@router.get("/users", response_model=List[userschema.UserOut], dependencies=[Depends(allow_admin)])
def get_users(db: Session = Depends(get_db)):
    return userservices.get_users(db)


@router.get("/user/{user_id}", response_model=userschema.UserOut,
            dependencies=[Depends(validate_current_token)])
def get_user(user_id: int, db: Session = Depends(get_db)):
    return userservices.get_user(db, user_id)


@router.put("/user/{user_id}", response_model=userschema.UserOut, dependencies=[Depends(allow_admin)])
def update_user(user_id: int, user: userschema.UserUpdate, db: Session = Depends(get_db)):
    return userservices.update_user(db, user_id, user)


@router.delete("/user/{user_id}", status_code=status.HTTP_204_NO_CONTENT,
               dependencies=[Depends(allow_admin)])
def delete_user(user_id: int, db: Session = Depends(get_db)):
    userservices.delete_user(db, user_id)
