"""
ORM model for the Manuscript entity and its status vocabulary.

A manuscript is a pre-publication submission owned by an author. Its content
is stored as an opaque text blob.
"""

import enum

from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from selfpress.db.session import Base


class ManuscriptStatus(str, enum.Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    IN_REVIEW = "in_review"
    REVISION_REQUESTED = "revision_requested"
    ACCEPTED = "accepted"
    PUBLISHED = "published"
    REJECTED = "rejected"

    @classmethod
    def parse(cls, value: str) -> "ManuscriptStatus":
        """
        Resolves a status string, mapping the legacy 'pending' value to
        SUBMITTED. Raises ValueError for anything else outside the vocabulary.
        """
        if isinstance(value, cls):
            return value
        if value == "pending":
            return cls.SUBMITTED
        return cls(value)


# Statuses an author may set on their own manuscript.
AUTHOR_STATUSES = {ManuscriptStatus.DRAFT, ManuscriptStatus.SUBMITTED}

# Statuses from which an admin may approve.
APPROVABLE_STATUSES = {ManuscriptStatus.SUBMITTED, ManuscriptStatus.IN_REVIEW}


class Manuscript(Base):
    """
    A manuscript submitted by an author.

    Attributes:
        id (int): Primary key.
        author_id (int): Owning user.
        title (str): Working title.
        content (str): Manuscript text, stored as-is.
        status (str): One of ManuscriptStatus.
        feedback (str): Editorial feedback shown to the author.
        editor_notes (str): Internal notes.
        progress_stage (int): Position in the publishing process.
    """
    __tablename__ = "manuscripts"

    id = Column(Integer, primary_key=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    genre = Column(String(100), nullable=True)
    word_count = Column(Integer, nullable=True)
    status = Column(String(32), default=ManuscriptStatus.DRAFT.value, nullable=False, index=True)
    cover_design = Column(String(255), nullable=True)
    cover_image = Column(String(512), nullable=True)
    feedback = Column(Text, nullable=True)
    editor_notes = Column(Text, nullable=True)
    target_audience = Column(String(255), nullable=True)
    progress_stage = Column(Integer, nullable=True)
    estimated_completion_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=func.now(), onupdate=func.now(), nullable=False)

    author = relationship("User", back_populates="manuscripts")

    def __repr__(self) -> str:
        return f"<Manuscript(id={self.id}, title='{self.title[:30]}', status='{self.status}')>"
