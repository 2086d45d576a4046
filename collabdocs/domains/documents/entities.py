from datetime import datetime, timezone
from typing import Optional, Dict, Any

from collabdocs.domains.documents.content import empty_content, normalize_content

DEFAULT_TITLE = "Untitled"


class Document:
    """Сущность документа домена Documents"""

    def __init__(
        self,
        id: Optional[str],
        title: str = DEFAULT_TITLE,
        content: Optional[Dict[str, Any]] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.title = title
        self.content = content if content is not None else empty_content()
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)

    def replace_content(self, new_content: Any) -> None:
        """Полная замена содержимого документа"""
        self.content = normalize_content(new_content)
        self.updated_at = datetime.now(timezone.utc)

    def update_title(self, new_title: str) -> None:
        """Обновление заголовка документа"""
        self.title = new_title
        self.updated_at = datetime.now(timezone.utc)

    @classmethod
    def create_document(cls, title: Optional[str] = None, content: Any = None) -> "Document":
        """Создание нового документа"""
        return cls(
            id=None,
            title=title or DEFAULT_TITLE,
            content=normalize_content(content)
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Document):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"Document(id={self.id}, title={self.title})"
