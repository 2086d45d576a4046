from typing import Annotated, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./collabdocs.db"
    database_echo: bool = False

    jwt_secret: str
    jwt_algorithm: str = "HS256"

    # Сессия, выданная после входа через OAuth провайдера
    session_cookie_name: str = "collabdocs_session"
    session_expire_minutes: int = 60 * 24 * 30

    oauth_provider: str = "google"
    oauth_client_id: str = ""
    oauth_client_secret: str = ""
    oauth_authorize_url: str = "https://accounts.google.com/o/oauth2/v2/auth"
    oauth_token_url: str = "https://oauth2.googleapis.com/token"
    oauth_userinfo_url: str = "https://openidconnect.googleapis.com/v1/userinfo"
    oauth_redirect_url: str = "http://localhost:8000/api/auth/callback/google"
    oauth_scope: str = "openid email profile"

    allowed_origins: Annotated[List[str], NoDecode] = ["*"]

    debug: bool = False
    log_level: str = ""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def parse_allowed_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @property
    def effective_log_level(self) -> str:
        if self.log_level:
            return self.log_level.upper()
        return "DEBUG" if self.debug else "INFO"


settings = Settings()
