import uuid
from datetime import datetime, timezone
from typing import Optional

from cvdash.core.security import get_password_hash, verify_password


class User:
    """Сущность пользователя домена Identity"""

    def __init__(
        self,
        uuid: uuid.UUID,
        email: str,
        name: str,
        password_hash: str,
        role: str = "USER",
        plan: str = "FREE",
        credits: int = 5,
        is_active: bool = True,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.email = email
        self.name = name
        self.password_hash = password_hash
        self.role = role
        self.plan = plan
        self.credits = credits
        self.is_active = is_active
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)

    def authenticate(self, password: str) -> bool:
        """Проверка пароля пользователя"""
        return verify_password(password, self.password_hash)

    @classmethod
    def create_user(
        cls,
        email: str,
        name: str,
        password: str,
        role: str = "USER",
        plan: str = "FREE",
        credits: int = 5
    ) -> "User":
        """Создание нового пользователя с хешированием пароля"""
        return cls(
            uuid=uuid.uuid4(),
            email=email,
            name=name,
            password_hash=get_password_hash(password),
            role=role,
            plan=plan,
            credits=credits
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"User(uuid={self.uuid}, email={self.email})"
