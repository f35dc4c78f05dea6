from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
import logging
import uuid

from cvdash.db.repositories.user_repository import UserRepository
from cvdash.domains.identity.entities import User
from cvdash.domains.identity.schemas import UserCreate, UserLogin
from cvdash.core.security import create_access_token, verify_token

logger = logging.getLogger(__name__)


class IdentityService:
    """Сервис для работы с идентификацией и аутентификацией пользователей"""

    def __init__(self, session: Optional[AsyncSession] = None, user_repository: Optional[UserRepository] = None):
        self.session = session
        self.user_repository = user_repository or UserRepository(session)

    async def register_user(self, user_data: UserCreate) -> User:
        """Регистрация нового пользователя"""
        if await self.user_repository.email_exists(user_data.email):
            raise ValueError("User with this email already exists")

        user = User.create_user(
            email=user_data.email,
            name=user_data.name,
            password=user_data.password
        )

        created = await self.user_repository.create(user)
        logger.info("Registered user %s", created.uuid)
        return created

    async def authenticate_user(self, login_data: UserLogin) -> Optional[User]:
        """Аутентификация пользователя"""
        user = await self.user_repository.get_by_email(login_data.email)

        if not user or not user.is_active:
            return None

        if not user.authenticate(login_data.password):
            return None

        return user

    async def login_user(self, login_data: UserLogin) -> Optional[str]:
        """Вход пользователя и создание JWT токена"""
        user = await self.authenticate_user(login_data)

        if not user:
            return None

        return create_access_token(data={"sub": str(user.uuid), "email": user.email})

    async def get_user_by_uuid(self, user_uuid: uuid.UUID) -> Optional[User]:
        """Получение пользователя по UUID"""
        return await self.user_repository.get_by_uuid(user_uuid)

    async def get_current_user_from_token(self, token: Optional[str]) -> Optional[User]:
        """Получение текущего пользователя из JWT токена"""
        if not token:
            return None

        payload = verify_token(token)
        if not payload or not payload.get("sub"):
            return None

        try:
            user_uuid = uuid.UUID(payload["sub"])
        except (TypeError, ValueError):
            return None

        # Ошибки БД пробрасываются вызывающему
        user = await self.get_user_by_uuid(user_uuid)

        if user is None or not user.is_active:
            return None

        return user
