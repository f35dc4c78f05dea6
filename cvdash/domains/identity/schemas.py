from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime
import uuid

from cvdash.core.schemas import CamelModel


class UserBase(BaseModel):
    """Базовая схема пользователя"""
    email: EmailStr
    name: str = Field(..., min_length=2, max_length=100)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if len(v.strip()) < 2:
            raise ValueError('Name must be at least 2 characters')
        return v.strip()


class UserCreate(UserBase):
    """Схема для регистрации пользователя"""
    password: str = Field(..., min_length=6, max_length=128)


class UserLogin(BaseModel):
    """Схема для входа пользователя"""
    email: EmailStr
    password: str


class UserResponse(CamelModel):
    """Схема для ответа с данными пользователя"""
    id: uuid.UUID
    name: str
    email: str
    plan: str
    credits: int

    @classmethod
    def from_user(cls, user) -> "UserResponse":
        return cls(id=user.uuid, name=user.name, email=user.email, plan=user.plan, credits=user.credits)


class UserProfile(UserResponse):
    """Профиль текущего пользователя"""
    role: str
    created_at: datetime

    @classmethod
    def from_user(cls, user) -> "UserProfile":
        return cls(
            id=user.uuid,
            name=user.name,
            email=user.email,
            plan=user.plan,
            credits=user.credits,
            role=user.role,
            created_at=user.created_at
        )


class Token(BaseModel):
    """Схема для JWT токена"""
    access_token: str
    token_type: str = "bearer"


class UserRegistered(BaseModel):
    """Ответ на регистрацию"""
    message: str = "User created successfully"
    user: UserResponse
