import asyncio
import logging
from typing import Any, Dict, Optional

from collabdocs.client.api import ApiClient, ApiError
from collabdocs.client.autosave import AUTOSAVE_DELAY, Autosave
from collabdocs.client.editor import EditorState, TextSelection
from collabdocs.client.sidebar import CommentsSidebar, prepare_text
from collabdocs.client.stores import CommentsStore, DocumentStore
from collabdocs.domains.comments.anchoring import HighlightLayer, clear_highlights
from collabdocs.domains.comments.schemas import CommentResponse, ReplyResponse
from collabdocs.domains.identity.schemas import UserResponse

logger = logging.getLogger(__name__)


class DocumentPage:
    """Страница документа: редактор, панель комментариев и автосохранение.

    Сохранение всегда отправляет текущие заголовок и содержимое целиком.
    """

    def __init__(self, api: ApiClient, document_id: str, autosave_delay: float = AUTOSAVE_DELAY):
        self.api = api
        self.document_store = DocumentStore(api, document_id)
        self.comments_store = CommentsStore(api, document_id)
        self.editor = EditorState()
        self.highlights = HighlightLayer()
        self.sidebar = CommentsSidebar()
        self.autosave = Autosave(self.save, delay=autosave_delay)
        self.title = ""
        self.current_user: Optional[UserResponse] = None

        self.comments_store.subscribe(self._on_comments_changed)

    @property
    def document_id(self) -> str:
        return self.document_store.document_id

    @property
    def is_saving(self) -> bool:
        return self.autosave.is_saving

    async def load(self) -> None:
        await asyncio.gather(
            self.document_store.load(),
            self.comments_store.load(),
            self._load_current_user()
        )

        document = self.document_store.document
        if document:
            self.title = document.title
            self.editor.load(document.content)
            self.highlights.set_content(self.editor.content)

    async def _load_current_user(self) -> None:
        try:
            user = await self.api.get_session()
            if user is None:
                users = await self.api.list_users()
                user = users[0] if users else None
        except ApiError as e:
            logger.warning("Could not resolve current user: %s", e)
            user = None

        self.current_user = user
        self.sidebar.current_user_id = user.id if user else None

    def _on_comments_changed(self) -> None:
        self.sidebar.set_comments(self.comments_store.comments)
        self.highlights.set_comments(self.comments_store.comments)

    # Редактирование

    def edit_title(self, title: str) -> None:
        self.title = title
        self.autosave.touch()

    def edit_content(self, content: Dict[str, Any]) -> None:
        self.editor.set_content(clear_highlights(content))
        self.highlights.set_content(self.editor.content)
        self.autosave.touch()

    async def save(self) -> None:
        await self.document_store.update_document(title=self.title, content=self.editor.content)

    async def close(self) -> None:
        """Незаписанные изменения сохраняются перед уходом со страницы"""
        if self.autosave.pending:
            await self.autosave.flush()

    # Комментарии

    def select(self, start: int, end: int) -> Optional[TextSelection]:
        return self.editor.select(start, end)

    async def add_comment(self, text: str) -> Optional[CommentResponse]:
        """Комментарий к текущему выделению от имени текущего пользователя"""
        content = prepare_text(text)
        selection = self.editor.selection
        if not self.current_user or not selection or not content:
            return None

        comment = await self.comments_store.add_comment(
            user_id=self.current_user.id,
            content=content,
            highlighted_text=selection.text,
            selection_from=selection.start,
            selection_to=selection.end
        )
        self.editor.clear_selection()
        self.sidebar.set_active(comment.id)
        return comment

    async def reply(self, comment_id: str, text: str) -> Optional[ReplyResponse]:
        content = prepare_text(text)
        if not self.current_user or not content:
            return None
        return await self.comments_store.add_reply(comment_id, self.current_user.id, content)

    async def edit_comment(self, comment: CommentResponse, text: str) -> Optional[CommentResponse]:
        content = prepare_text(text)
        if not content or not self.sidebar.can_modify(comment):
            return None
        return await self.comments_store.update_comment(comment.id, content)

    async def delete_comment(self, comment: CommentResponse) -> bool:
        if not self.sidebar.can_modify(comment):
            return False
        await self.comments_store.delete_comment(comment.id)
        return True

    async def resolve(self, comment_id: str, is_resolved: bool = True) -> CommentResponse:
        return await self.comments_store.resolve_comment(comment_id, is_resolved)

    async def edit_reply(self, reply: ReplyResponse, text: str) -> Optional[ReplyResponse]:
        content = prepare_text(text)
        if not content or not self.sidebar.can_modify_reply(reply):
            return None
        return await self.comments_store.update_reply(reply.id, content)

    async def delete_reply(self, reply: ReplyResponse) -> bool:
        if not self.sidebar.can_modify_reply(reply):
            return False
        await self.comments_store.delete_reply(reply.id)
        return True
