from pydantic import BaseModel

from labrecord.core.enums import UserRole

class UserCreate(BaseModel):
    email: str
    password: str
    full_name: str
    role: UserRole  # "teacher" or "student"

class UserLogin(BaseModel):
    email: str
    password: str

class Token(BaseModel):
    access_token: str
    token_type: str

class User(BaseModel):
    id: int
    email: str
    full_name: str
    role: str

    class Config:
        from_attributes = True
