from collabdocs.db.models.user import User
from collabdocs.db.models.document import Document
from collabdocs.db.models.comment import Comment, Reply

__all__ = [
    "User",
    "Document",
    "Comment",
    "Reply"
]
