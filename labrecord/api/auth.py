from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from labrecord.api.deps import get_db, get_current_user
from labrecord.db.models.user import User as UserModel
from labrecord.schemas.user import UserCreate, UserLogin, Token, User
from labrecord.crud import user as crud_user
from labrecord.core.security import verify_password, create_access_token

router = APIRouter()


@router.post("/register", response_model=Token)
def register(user_in: UserCreate, db: Session = Depends(get_db)):
    if crud_user.get_user_by_email(db, user_in.email):
        raise HTTPException(status_code=400, detail="Email is already registered")

    user = crud_user.create_user(db, user_in)
    access_token = create_access_token(user.email, role=user.role)
    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/login", response_model=Token)
def login(form: UserLogin, db: Session = Depends(get_db)):
    user = crud_user.get_user_by_email(db, form.email)
    if not user or not verify_password(form.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    access_token = create_access_token(user.email, role=user.role)
    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/me", response_model=User)
def read_me(current_user: UserModel = Depends(get_current_user)):
    return current_user


# Tokens are stateless; signing out means the client drops its token
@router.post("/logout")
def logout(current_user: UserModel = Depends(get_current_user)):
    return {"status": "signed_out"}
