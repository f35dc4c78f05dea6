from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import ValidationError

from cvdash.api.http.templating import render
from cvdash.core.auth import IdentityResolver, get_current_user, get_identity_resolver
from cvdash.core.config import settings
from cvdash.core.db import get_db
from cvdash.domains.identity.entities import User
from cvdash.domains.identity.schemas import (
    UserCreate, UserLogin, UserResponse, UserProfile, UserRegistered, Token
)
from cvdash.domains.identity.services import IdentityService

router = APIRouter(prefix="/auth", tags=["authentication"])


def get_identity_service(db: AsyncSession = Depends(get_db)) -> IdentityService:
    return IdentityService(db)


def start_session(token: str) -> RedirectResponse:
    """Переход в приложение с cookie сессии"""
    response = RedirectResponse("/app", status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        samesite="lax",
    )
    return response


@router.post("/register", response_model=UserRegistered)
async def register(
    user_data: UserCreate,
    identity_service: IdentityService = Depends(get_identity_service)
):
    """Регистрация нового пользователя"""
    try:
        user = await identity_service.register_user(user_data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return UserRegistered(user=UserResponse.from_user(user))


@router.post("/login", response_model=Token)
async def login(
    login_data: UserLogin,
    identity_service: IdentityService = Depends(get_identity_service)
):
    """Вход пользователя"""
    token = await identity_service.login_user(login_data)

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return Token(access_token=token)


@router.get("/me", response_model=UserProfile)
async def me(user: User = Depends(get_current_user)):
    """Данные текущего пользователя"""
    return UserProfile.from_user(user)


@router.get("/signin")
async def signin_page(request: Request):
    """Страница входа"""
    return render(request, "auth/signin.html")


@router.post("/signin")
async def signin(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    identity_service: IdentityService = Depends(get_identity_service)
):
    """Вход через форму: cookie сессии и переход в приложение"""
    try:
        login_data = UserLogin(email=email, password=password)
    except ValidationError:
        login_data = None

    token = await identity_service.login_user(login_data) if login_data else None

    if not token:
        return render(
            request,
            "auth/signin.html",
            status_code=status.HTTP_401_UNAUTHORIZED,
            error="Invalid email or password",
            email=email,
        )

    return start_session(token)


@router.get("/signup")
async def signup_page(
    request: Request,
    resolver: IdentityResolver = Depends(get_identity_resolver)
):
    """Страница регистрации; вошедших пользователей отправляет в приложение"""
    if await resolver.resolve_identity():
        return RedirectResponse("/app", status_code=status.HTTP_303_SEE_OTHER)

    return render(request, "auth/signup.html")


@router.post("/signup")
async def signup(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    identity_service: IdentityService = Depends(get_identity_service)
):
    """Регистрация через форму и вход в приложение"""
    try:
        user_data = UserCreate(name=name, email=email, password=password)
        await identity_service.register_user(user_data)
    except ValidationError as e:
        error = e.errors()[0]["msg"]
    except ValueError as e:
        error = str(e)
    else:
        token = await identity_service.login_user(UserLogin(email=user_data.email, password=password))
        return start_session(token)

    return render(
        request,
        "auth/signup.html",
        status_code=status.HTTP_400_BAD_REQUEST,
        error=error,
        name=name,
        email=email,
    )


@router.post("/signout")
async def signout():
    """Выход пользователя"""
    response = RedirectResponse(settings.signin_path, status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(settings.session_cookie_name)
    return response
