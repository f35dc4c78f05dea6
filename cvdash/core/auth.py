from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from cvdash.core.config import settings
from cvdash.core.db import get_db
from cvdash.core.security import extract_token_from_header
from cvdash.domains.identity.entities import User
from cvdash.domains.identity.services import IdentityService

AUTHENTICATION_REQUIRED = "Authentication required"


class SigninRequired(Exception):
    """Страница запрошена без входа: перенаправление на страницу входа"""


class IdentityResolver:
    """Определяет пользователя текущего запроса по токену"""

    def __init__(self, identity_service: IdentityService, token: Optional[str]):
        self.identity_service = identity_service
        self.token = token

    async def resolve_identity(self) -> Optional[User]:
        """Пользователь запроса или None"""
        return await self.identity_service.get_current_user_from_token(self.token)

    async def require_auth(self) -> User:
        """Пользователь запроса; 401, если он не определен"""
        user = await self.resolve_identity()

        if not user:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=AUTHENTICATION_REQUIRED,
                headers={"WWW-Authenticate": "Bearer"},
            )

        return user


def get_request_token(request: Request) -> Optional[str]:
    """Токен из заголовка Authorization или из cookie сессии"""
    token = extract_token_from_header(request.headers.get("Authorization"))
    return token or request.cookies.get(settings.session_cookie_name)


async def get_identity_resolver(
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> IdentityResolver:
    """Зависимость, предоставляющая IdentityResolver"""
    return IdentityResolver(IdentityService(db), get_request_token(request))


async def get_current_user(resolver: IdentityResolver = Depends(get_identity_resolver)) -> User:
    """Зависимость для получения текущего пользователя"""
    return await resolver.require_auth()


async def require_page_user(resolver: IdentityResolver = Depends(get_identity_resolver)) -> User:
    """Пользователь для защищенных страниц; без входа - SigninRequired"""
    user = await resolver.resolve_identity()

    if not user:
        raise SigninRequired()

    return user
