from collabdocs.domains.comments.entities import Comment, Reply
from collabdocs.domains.comments.schemas import (
    CommentCreate,
    CommentUpdate,
    CommentResolve,
    CommentResponse,
    ReplyCreate,
    ReplyUpdate,
    ReplyResponse
)
from collabdocs.domains.comments.services import CommentService

__all__ = [
    "Comment",
    "Reply",
    "CommentCreate",
    "CommentUpdate",
    "CommentResolve",
    "CommentResponse",
    "ReplyCreate",
    "ReplyUpdate",
    "ReplyResponse",
    "CommentService"
]
