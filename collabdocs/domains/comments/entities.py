from datetime import datetime, timezone
from typing import Optional, List, TYPE_CHECKING

if TYPE_CHECKING:
    from collabdocs.domains.identity.entities import User


class Reply:
    """Ответ в ветке комментария"""

    def __init__(
        self,
        id: Optional[str],
        comment_id: str,
        user_id: str,
        content: str,
        user: Optional["User"] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.comment_id = comment_id
        self.user_id = user_id
        self.content = content
        self.user = user
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)

    @classmethod
    def create_reply(cls, comment_id: str, user_id: Optional[str], content: Optional[str]) -> "Reply":
        """Создание ответа; автор и текст обязательны"""
        if not user_id or not content:
            raise ValueError("Missing required fields")
        return cls(id=None, comment_id=comment_id, user_id=user_id, content=content)

    def __repr__(self) -> str:
        return f"Reply(id={self.id}, comment_id={self.comment_id})"


class Comment:
    """Комментарий, привязанный к диапазону [selection_from, selection_to) текста документа.

    Смещения фиксируются в момент создания и дальше не пересчитываются:
    после правок документа они могут указывать не туда или выходить за границы.
    """

    def __init__(
        self,
        id: Optional[str],
        document_id: str,
        user_id: str,
        highlighted_text: str,
        selection_from: int,
        selection_to: int,
        content: str,
        is_resolved: bool = False,
        user: Optional["User"] = None,
        replies: Optional[List[Reply]] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.document_id = document_id
        self.user_id = user_id
        self.highlighted_text = highlighted_text
        self.selection_from = selection_from
        self.selection_to = selection_to
        self.content = content
        self.is_resolved = is_resolved
        self.user = user
        self.replies = replies or []
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)

    @classmethod
    def create_comment(
        cls,
        document_id: str,
        user_id: Optional[str],
        content: Optional[str],
        highlighted_text: Optional[str],
        selection_from: Optional[int] = None,
        selection_to: Optional[int] = None
    ) -> "Comment":
        """Создание комментария к выделенному тексту.

        Если конец выделения не передан, он вычисляется как
        ``selection_from + len(highlighted_text)``.
        """
        if not user_id or not content or not highlighted_text:
            raise ValueError("Missing required fields")

        start = selection_from or 0
        end = selection_to if selection_to is not None else start + len(highlighted_text)

        if start < 0 or end < 0:
            raise ValueError("Selection offsets must not be negative")
        if start > end:
            raise ValueError("selectionFrom must not exceed selectionTo")

        return cls(
            id=None,
            document_id=document_id,
            user_id=user_id,
            highlighted_text=highlighted_text,
            selection_from=start,
            selection_to=end,
            content=content
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Comment):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return (
            f"Comment(id={self.id}, document_id={self.document_id}, "
            f"range=[{self.selection_from}, {self.selection_to}), resolved={self.is_resolved})"
        )
