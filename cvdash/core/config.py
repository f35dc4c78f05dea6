from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "MatchMyCV"

    database_url: str = "sqlite+aiosqlite:///./cvdash.db"
    database_echo: bool = False

    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    session_cookie_name: str = "cvdash_session"
    signin_path: str = "/auth/signin"
    # Форма загрузки отправляет файл во внешний сервис
    upload_url: str = "/api/upload"

    # Список через запятую
    cors_origins: str = "*"
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
