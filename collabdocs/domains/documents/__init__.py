from collabdocs.domains.documents.entities import Document, DEFAULT_TITLE
from collabdocs.domains.documents.schemas import DocumentCreate, DocumentUpdate, DocumentResponse
from collabdocs.domains.documents.services import DocumentService

__all__ = [
    "Document", "DEFAULT_TITLE",
    "DocumentCreate", "DocumentUpdate", "DocumentResponse",
    "DocumentService"
]
