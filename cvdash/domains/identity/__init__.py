from cvdash.domains.identity.entities import User
from cvdash.domains.identity.schemas import (
    UserBase, UserCreate, UserLogin, UserResponse, UserProfile, UserRegistered, Token
)
from cvdash.domains.identity.services import IdentityService

__all__ = [
    "User",
    "UserBase", "UserCreate", "UserLogin", "UserResponse", "UserProfile", "UserRegistered", "Token",
    "IdentityService"
]
