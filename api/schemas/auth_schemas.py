from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6)
    phone: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please add a name")
        return v


class LoginResponse(BaseModel):
    message: str
    token_set: bool
    streak_count: int
    points: int
    enrolled_courses: int


class RegisterResponse(BaseModel):
    message: str
    user_id: int
    streak_count: int


class LogoutResponse(BaseModel):
    message: str


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str = Field(min_length=6)


class AuthTokenPayload(BaseModel):
    sub: str
    exp: Optional[datetime] = None
