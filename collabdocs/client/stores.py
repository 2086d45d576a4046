"""Состояние клиента: отдельный контейнер на каждую сущность.

Ошибки загрузки сохраняются в ``error``, при этом прежнее состояние не
сбрасывается. Ошибки изменений тоже сохраняются в ``error``, состояние
остается прежним, а исключение пробрасывается вызывающему коду.
"""
import logging
from typing import Callable, List, Optional

from collabdocs.client.api import ApiClient, ApiError
from collabdocs.domains.comments.schemas import CommentResponse, ReplyResponse
from collabdocs.domains.documents.schemas import DocumentResponse

logger = logging.getLogger(__name__)


class Store:
    """Базовый контейнер: флаг загрузки, последняя ошибка и подписчики"""

    def __init__(self, api: ApiClient):
        self.api = api
        self.is_loading = False
        self.error: Optional[str] = None
        self._listeners: List[Callable[[], None]] = []

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def _fail(self, error: ApiError) -> None:
        self.error = str(error)
        logger.warning("%s", self.error)
        self._notify()


class DocumentsStore(Store):
    """Список документов"""

    def __init__(self, api: ApiClient):
        super().__init__(api)
        self.documents: List[DocumentResponse] = []

    async def load(self) -> None:
        self.is_loading = True
        try:
            documents = await self.api.list_documents()
        except ApiError as e:
            self._fail(e)
            return
        finally:
            self.is_loading = False

        self.documents = documents
        self.error = None
        self._notify()

    async def refetch(self) -> None:
        await self.load()

    async def create_document(self, title: Optional[str] = None) -> DocumentResponse:
        try:
            document = await self.api.create_document(title)
        except ApiError as e:
            self._fail(e)
            raise
        self.documents = [document] + self.documents
        self._notify()
        return document

    async def delete_document(self, document_id: str) -> None:
        try:
            await self.api.delete_document(document_id)
        except ApiError as e:
            self._fail(e)
            raise
        self.documents = [doc for doc in self.documents if doc.id != document_id]
        self._notify()


class DocumentStore(Store):
    """Один документ; при смене id загружается заново"""

    def __init__(self, api: ApiClient, document_id: Optional[str] = None):
        super().__init__(api)
        self.document_id = document_id
        self.document: Optional[DocumentResponse] = None

    async def load(self) -> None:
        document_id = self.document_id
        if not document_id:
            self.document = None
            self._notify()
            return

        self.is_loading = True
        try:
            document = await self.api.get_document(document_id)
        except ApiError as e:
            self._fail(e)
            return
        finally:
            self.is_loading = False

        # Ответ для уже неактуального id отбрасывается
        if document_id == self.document_id:
            self.document = document
            self.error = None
            self._notify()

    async def set_document_id(self, document_id: Optional[str]) -> None:
        if document_id == self.document_id:
            return
        self.document_id = document_id
        self.document = None
        await self.load()

    async def update_document(self, title: Optional[str] = None, content: Optional[dict] = None) -> DocumentResponse:
        try:
            document = await self.api.update_document(self.document_id, title=title, content=content)
        except ApiError as e:
            self._fail(e)
            raise
        self.document = document
        self._notify()
        return document


class CommentsStore(Store):
    """Комментарии документа.

    Изменения комментариев применяются к списку локально; после любых
    изменений ответов список загружается заново целиком.
    """

    def __init__(self, api: ApiClient, document_id: Optional[str] = None):
        super().__init__(api)
        self.document_id = document_id
        self.comments: List[CommentResponse] = []

    async def load(self) -> None:
        document_id = self.document_id
        if not document_id:
            self.comments = []
            self._notify()
            return

        self.is_loading = True
        try:
            comments = await self.api.list_comments(document_id)
        except ApiError as e:
            self._fail(e)
            return
        finally:
            self.is_loading = False

        if document_id == self.document_id:
            self.comments = comments
            self.error = None
            self._notify()

    async def refetch(self) -> None:
        await self.load()

    async def set_document_id(self, document_id: Optional[str]) -> None:
        if document_id == self.document_id:
            return
        self.document_id = document_id
        self.comments = []
        await self.load()

    def _replace(self, comment: CommentResponse) -> None:
        self.comments = [comment if c.id == comment.id else c for c in self.comments]
        self._notify()

    async def add_comment(
        self,
        user_id: str,
        content: str,
        highlighted_text: str,
        selection_from: int,
        selection_to: Optional[int] = None
    ) -> CommentResponse:
        try:
            comment = await self.api.create_comment(
                self.document_id,
                user_id=user_id,
                content=content,
                highlighted_text=highlighted_text,
                selection_from=selection_from,
                selection_to=selection_to
            )
        except ApiError as e:
            self._fail(e)
            raise
        self.comments = [comment] + self.comments
        self._notify()
        return comment

    async def update_comment(self, comment_id: str, content: str) -> CommentResponse:
        try:
            comment = await self.api.update_comment(comment_id, content)
        except ApiError as e:
            self._fail(e)
            raise
        self._replace(comment)
        return comment

    async def resolve_comment(self, comment_id: str, is_resolved: bool = True) -> CommentResponse:
        try:
            comment = await self.api.resolve_comment(comment_id, is_resolved)
        except ApiError as e:
            self._fail(e)
            raise
        self._replace(comment)
        return comment

    async def delete_comment(self, comment_id: str) -> None:
        try:
            await self.api.delete_comment(comment_id)
        except ApiError as e:
            self._fail(e)
            raise
        self.comments = [c for c in self.comments if c.id != comment_id]
        self._notify()

    async def add_reply(self, comment_id: str, user_id: str, content: str) -> ReplyResponse:
        try:
            reply = await self.api.create_reply(comment_id, user_id, content)
        except ApiError as e:
            self._fail(e)
            raise
        await self.refetch()
        return reply

    async def update_reply(self, reply_id: str, content: str) -> ReplyResponse:
        try:
            reply = await self.api.update_reply(reply_id, content)
        except ApiError as e:
            self._fail(e)
            raise
        await self.refetch()
        return reply

    async def delete_reply(self, reply_id: str) -> None:
        try:
            await self.api.delete_reply(reply_id)
        except ApiError as e:
            self._fail(e)
            raise
        await self.refetch()
