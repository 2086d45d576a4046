from datetime import datetime
from typing import Any, Dict, Optional

from collabdocs.domains.schemas import CamelModel


class DocumentCreate(CamelModel):
    """Схема для создания документа"""
    title: Optional[str] = None
    # Дерево документа; строки старого формата приводятся к дереву в сервисе
    content: Optional[Any] = None


class DocumentUpdate(CamelModel):
    """Схема для обновления документа (частичное)"""
    title: Optional[str] = None
    content: Optional[Any] = None


class DocumentResponse(CamelModel):
    """Схема для ответа с данными документа"""
    id: str
    title: str
    content: Dict[str, Any]
    created_at: datetime
    updated_at: datetime
