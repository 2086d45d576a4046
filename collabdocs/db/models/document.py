from sqlalchemy import Column, Text, JSON
from sqlalchemy.orm import relationship

from collabdocs.db.base import BaseModel


class Document(BaseModel):
    __tablename__ = "documents"

    title = Column(Text, nullable=False, default="Untitled")
    content = Column(JSON, nullable=False)

    # Relationships
    comments = relationship(
        "Comment",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
