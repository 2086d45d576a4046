from collabdocs.db.repositories.user_repository import UserRepository
from collabdocs.db.repositories.document_repository import DocumentRepository
from collabdocs.db.repositories.comment_repository import CommentRepository, ReplyRepository

__all__ = [
    "UserRepository",
    "DocumentRepository",
    "CommentRepository",
    "ReplyRepository"
]
