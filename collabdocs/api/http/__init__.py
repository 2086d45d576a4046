from collabdocs.api.http.auth import router as auth_router
from collabdocs.api.http.comments import router as comments_router
from collabdocs.api.http.documents import router as documents_router
from collabdocs.api.http.pages import router as pages_router
from collabdocs.api.http.replies import router as replies_router
from collabdocs.api.http.users import router as users_router

__all__ = [
    "auth_router",
    "comments_router",
    "documents_router",
    "pages_router",
    "replies_router",
    "users_router"
]
