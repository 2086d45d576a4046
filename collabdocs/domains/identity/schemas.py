from datetime import datetime
from typing import Optional

from collabdocs.domains.schemas import CamelModel


class UserSummary(CamelModel):
    """Автор комментария или ответа"""
    id: str
    name: str
    email: str
    avatar_url: Optional[str] = None
    image: Optional[str] = None


class UserResponse(UserSummary):
    """Схема для ответа с данными пользователя"""
    created_at: datetime
    updated_at: datetime


class OAuthProfile(CamelModel):
    """Профиль, полученный от провайдера идентификации"""
    sub: Optional[str] = None
    email: str
    name: Optional[str] = None
    picture: Optional[str] = None
