from typing import Optional, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
import uuid

from cvdash.db.base import as_utc
from cvdash.db.models.user import User as UserModel

if TYPE_CHECKING:
    from cvdash.domains.identity.entities import User


class UserRepository:
    """Репозиторий для работы с пользователями"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: "User") -> "User":
        """Создание нового пользователя"""
        db_user = UserModel(
            uuid=user.uuid,
            email=user.email,
            name=user.name,
            password_hash=user.password_hash,
            role=user.role,
            plan=user.plan,
            credits=user.credits,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at
        )

        self.session.add(db_user)
        try:
            await self.session.commit()
            await self.session.refresh(db_user)
            return self._to_domain(db_user)
        except IntegrityError:
            await self.session.rollback()
            raise ValueError("User with this email already exists")

    async def get_by_uuid(self, user_uuid: uuid.UUID) -> Optional["User"]:
        """Получение пользователя по UUID"""
        result = await self.session.execute(
            select(UserModel).where(UserModel.uuid == user_uuid)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def get_by_email(self, email: str) -> Optional["User"]:
        """Получение пользователя по email"""
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def email_exists(self, email: str) -> bool:
        """Проверка существования email"""
        result = await self.session.execute(
            select(UserModel.uuid).where(UserModel.email == email)
        )
        return result.scalar_one_or_none() is not None

    def _to_domain(self, db_user: UserModel) -> "User":
        """Преобразование модели БД в доменную сущность"""
        from cvdash.domains.identity.entities import User

        return User(
            uuid=db_user.uuid,
            email=db_user.email,
            name=db_user.name,
            password_hash=db_user.password_hash,
            role=db_user.role,
            plan=db_user.plan,
            credits=db_user.credits,
            is_active=db_user.is_active,
            created_at=as_utc(db_user.created_at),
            updated_at=as_utc(db_user.updated_at)
        )
