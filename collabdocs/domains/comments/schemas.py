from datetime import datetime
from typing import List, Optional

from pydantic import Field

from collabdocs.domains.identity.schemas import UserSummary
from collabdocs.domains.schemas import CamelModel


class CommentCreate(CamelModel):
    """Схема для создания комментария.

    Обязательные поля проверяются в сервисе, чтобы на пустые значения
    отвечать 400, а не ошибкой валидации схемы.
    """
    user_id: Optional[str] = None
    content: Optional[str] = None
    highlighted_text: Optional[str] = None
    selection_from: Optional[int] = None
    selection_to: Optional[int] = None


class CommentUpdate(CamelModel):
    """Схема для изменения текста комментария"""
    content: Optional[str] = None


class CommentResolve(CamelModel):
    """Схема для закрытия/переоткрытия ветки"""
    is_resolved: Optional[bool] = None


class ReplyCreate(CamelModel):
    """Схема для создания ответа"""
    user_id: Optional[str] = None
    content: Optional[str] = None


class ReplyUpdate(CamelModel):
    """Схема для изменения ответа"""
    content: Optional[str] = None


class ReplyResponse(CamelModel):
    """Схема для ответа с данными ответа в ветке"""
    id: str
    comment_id: str
    user_id: str
    user: Optional[UserSummary] = None
    content: str
    created_at: datetime
    updated_at: datetime


class CommentResponse(CamelModel):
    """Схема для ответа с данными комментария"""
    id: str
    document_id: str
    user_id: str
    user: Optional[UserSummary] = None
    highlighted_text: str
    selection_from: int
    selection_to: int
    content: str
    is_resolved: bool
    replies: List[ReplyResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
