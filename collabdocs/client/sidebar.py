from typing import Any, List, Optional

from collabdocs.client.editor import TextSelection

THREAD_EXCERPT_LENGTH = 80
SELECTION_EXCERPT_LENGTH = 100


def excerpt(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def prepare_text(text: Optional[str]) -> Optional[str]:
    """Текст для отправки: без пробелов по краям, пустой не отправляется"""
    if text is None:
        return None
    text = text.strip()
    return text or None


class CommentsSidebar:
    """Модель панели комментариев.

    Открытые ветки показываются всегда, закрытые только при включенном
    ``show_resolved``. Править и удалять комментарий может только его автор
    и только пока ветка открыта; ответ может править только его автор.
    """

    def __init__(self, comments: Optional[List[Any]] = None, current_user_id: Optional[str] = None):
        self.comments = list(comments or [])
        self.current_user_id = current_user_id
        self.show_resolved = False
        self.active_comment_id: Optional[str] = None

    def set_comments(self, comments: List[Any]) -> None:
        self.comments = list(comments)
        if self.active_comment_id and not any(c.id == self.active_comment_id for c in self.comments):
            self.active_comment_id = None

    @property
    def open_comments(self) -> List[Any]:
        return [c for c in self.comments if not c.is_resolved]

    @property
    def resolved_comments(self) -> List[Any]:
        return [c for c in self.comments if c.is_resolved]

    @property
    def active_count(self) -> int:
        return len(self.open_comments)

    @property
    def visible_comments(self) -> List[Any]:
        if self.show_resolved:
            return self.open_comments + self.resolved_comments
        return self.open_comments

    def toggle_resolved(self) -> bool:
        self.show_resolved = not self.show_resolved
        return self.show_resolved

    def set_active(self, comment_id: Optional[str]) -> None:
        self.active_comment_id = comment_id

    def can_modify(self, comment: Any) -> bool:
        return (
            self.current_user_id is not None
            and comment.user_id == self.current_user_id
            and not comment.is_resolved
        )

    def can_modify_reply(self, reply: Any) -> bool:
        return self.current_user_id is not None and reply.user_id == self.current_user_id

    def thread_excerpt(self, comment: Any) -> str:
        return excerpt(comment.highlighted_text, THREAD_EXCERPT_LENGTH)

    def selection_excerpt(self, selection: TextSelection) -> str:
        return excerpt(selection.text, SELECTION_EXCERPT_LENGTH)
