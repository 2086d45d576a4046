from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from collabdocs.db.base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    name = Column(String(255), nullable=False, default="")
    email = Column(String(255), unique=True, index=True, nullable=False)
    avatar_url = Column(String(1024), nullable=True)

    # Relationships
    comments = relationship("Comment", back_populates="user", passive_deletes=True)
    replies = relationship("Reply", back_populates="user", passive_deletes=True)
