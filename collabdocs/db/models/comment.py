from sqlalchemy import Column, String, Text, Integer, Boolean, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship

from collabdocs.db.base import BaseModel


class Comment(BaseModel):
    __tablename__ = "comments"

    document_id = Column(String(64), ForeignKey("documents.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    highlighted_text = Column(Text, nullable=False)
    selection_from = Column(Integer, nullable=False, default=0)
    selection_to = Column(Integer, nullable=False, default=0)
    content = Column(Text, nullable=False)
    is_resolved = Column(Boolean, nullable=False, default=False)

    # Relationships
    document = relationship("Document", back_populates="comments")
    user = relationship("User", back_populates="comments")
    replies = relationship(
        "Reply",
        back_populates="comment",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Reply.created_at",
    )

    __table_args__ = (
        CheckConstraint("selection_from <= selection_to", name="ck_comments_selection_order"),
        Index("idx_comments_document", "document_id"),
    )


class Reply(BaseModel):
    __tablename__ = "replies"

    comment_id = Column(String(64), ForeignKey("comments.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)

    # Relationships
    comment = relationship("Comment", back_populates="replies")
    user = relationship("User", back_populates="replies")

    __table_args__ = (Index("idx_replies_comment", "comment_id"),)
