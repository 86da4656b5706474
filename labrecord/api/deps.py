# labrecord/api/deps.py
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from labrecord.core.executor import CodeExecutor
from labrecord.core.security import decode_access_token
from labrecord.crud import user as crud_user
from labrecord.db.models.user import User
from labrecord.db.session import SessionLocal
from labrecord.services.workflow import SubmissionWorkflow

bearer_scheme = HTTPBearer(auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_executor() -> CodeExecutor:
    return CodeExecutor()


def get_workflow(
    db: Session = Depends(get_db),
    executor: CodeExecutor = Depends(get_executor),
) -> SubmissionWorkflow:
    # one workflow object per request, bound to that request's session
    return SubmissionWorkflow(db, executor)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise unauthorized
    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError:
        raise unauthorized

    email = payload.get("sub")
    if not email:
        raise unauthorized
    user = crud_user.get_user_by_email(db, email)
    if not user:
        raise unauthorized
    return user


def require_teacher(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != "teacher":
        raise HTTPException(status_code=403, detail="Teachers only")
    return current_user


def require_student(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != "student":
        raise HTTPException(status_code=403, detail="Students only")
    return current_user
