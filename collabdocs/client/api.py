import logging
from typing import Any, Dict, List, Optional

import httpx

from collabdocs.domains.comments.schemas import CommentResponse, ReplyResponse
from collabdocs.domains.documents.schemas import DocumentResponse
from collabdocs.domains.identity.schemas import UserResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Неуспешный ответ API (любой статус вне 2xx) или сбой транспорта"""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


class ApiClient:
    """HTTP клиент API документов и комментариев"""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        client: Optional[httpx.AsyncClient] = None,
        session_token: Optional[str] = None,
        timeout: float = 10.0
    ):
        headers = {"Authorization": f"Bearer {session_token}"} if session_token else None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout, headers=headers)
        if client is not None and headers:
            self._client.headers.update(headers)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, action: str, json: Optional[Dict[str, Any]] = None) -> Any:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            logger.warning("Request %s %s failed: %s", method, path, e)
            raise ApiError(f"Failed to {action}") from e

        if not response.is_success:
            try:
                body = response.json()
            except ValueError:
                body = None
            detail = body.get("error") if isinstance(body, dict) else None
            raise ApiError(f"Failed to {action}", response.status_code, detail)

        return response.json()["data"]

    # Документы

    async def list_documents(self) -> List[DocumentResponse]:
        data = await self._request("GET", "/api/documents", "fetch documents")
        return [DocumentResponse.model_validate(item) for item in data]

    async def create_document(self, title: Optional[str] = None) -> DocumentResponse:
        body = {"title": title} if title is not None else {}
        data = await self._request("POST", "/api/documents", "create document", json=body)
        return DocumentResponse.model_validate(data)

    async def get_document(self, document_id: str) -> DocumentResponse:
        data = await self._request("GET", f"/api/documents/{document_id}", "fetch document")
        return DocumentResponse.model_validate(data)

    async def update_document(
        self,
        document_id: str,
        title: Optional[str] = None,
        content: Optional[Dict[str, Any]] = None
    ) -> DocumentResponse:
        body: Dict[str, Any] = {}
        if title is not None:
            body["title"] = title
        if content is not None:
            body["content"] = content
        data = await self._request("PATCH", f"/api/documents/{document_id}", "update document", json=body)
        return DocumentResponse.model_validate(data)

    async def delete_document(self, document_id: str) -> None:
        await self._request("DELETE", f"/api/documents/{document_id}", "delete document")

    # Комментарии

    async def list_comments(self, document_id: str) -> List[CommentResponse]:
        data = await self._request("GET", f"/api/documents/{document_id}/comments", "fetch comments")
        return [CommentResponse.model_validate(item) for item in data]

    async def create_comment(
        self,
        document_id: str,
        user_id: str,
        content: str,
        highlighted_text: str,
        selection_from: int,
        selection_to: Optional[int] = None
    ) -> CommentResponse:
        body = {
            "userId": user_id,
            "content": content,
            "highlightedText": highlighted_text,
            "selectionFrom": selection_from,
        }
        if selection_to is not None:
            body["selectionTo"] = selection_to
        data = await self._request("POST", f"/api/documents/{document_id}/comments", "create comment", json=body)
        return CommentResponse.model_validate(data)

    async def update_comment(self, comment_id: str, content: str) -> CommentResponse:
        data = await self._request("PATCH", f"/api/comments/{comment_id}", "update comment", json={"content": content})
        return CommentResponse.model_validate(data)

    async def resolve_comment(self, comment_id: str, is_resolved: bool = True) -> CommentResponse:
        data = await self._request(
            "POST", f"/api/comments/{comment_id}/resolve", "resolve comment", json={"isResolved": is_resolved}
        )
        return CommentResponse.model_validate(data)

    async def delete_comment(self, comment_id: str) -> None:
        await self._request("DELETE", f"/api/comments/{comment_id}", "delete comment")

    async def create_reply(self, comment_id: str, user_id: str, content: str) -> ReplyResponse:
        data = await self._request(
            "POST", f"/api/comments/{comment_id}/replies", "create reply", json={"userId": user_id, "content": content}
        )
        return ReplyResponse.model_validate(data)

    async def update_reply(self, reply_id: str, content: str) -> ReplyResponse:
        data = await self._request("PATCH", f"/api/replies/{reply_id}", "update reply", json={"content": content})
        return ReplyResponse.model_validate(data)

    async def delete_reply(self, reply_id: str) -> None:
        await self._request("DELETE", f"/api/replies/{reply_id}", "delete reply")

    # Пользователи

    async def list_users(self) -> List[UserResponse]:
        data = await self._request("GET", "/api/users", "fetch users")
        return [UserResponse.model_validate(item) for item in data]

    async def get_session(self) -> Optional[UserResponse]:
        data = await self._request("GET", "/api/auth/session", "fetch session")
        return UserResponse.model_validate(data) if data else None
