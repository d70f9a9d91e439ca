"""
Pydantic schemas for the Manuscript entity.
"""

import datetime
from typing import Annotated, Optional

from pydantic import BeforeValidator, Field

from ..models.manuscript import ManuscriptStatus
from .base import CamelModel, ORMCamelModel

def _parse_status(value):
    if value is None:
        return value
    try:
        return ManuscriptStatus.parse(value)
    except ValueError:
        allowed = ", ".join(s.value for s in ManuscriptStatus)
        raise ValueError(f"status must be one of: {allowed}")

# Accepts the legacy 'pending' spelling.
Status = Annotated[ManuscriptStatus, BeforeValidator(_parse_status)]

class ManuscriptCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: Optional[str] = None
    description: Optional[str] = None
    genre: Optional[str] = None
    word_count: Optional[int] = Field(None, ge=0)
    status: Status = ManuscriptStatus.DRAFT
    cover_design: Optional[str] = None
    cover_image: Optional[str] = None
    target_audience: Optional[str] = None

class ManuscriptUpdate(CamelModel):
    """Author revision of an own manuscript."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = None
    description: Optional[str] = None
    genre: Optional[str] = None
    word_count: Optional[int] = Field(None, ge=0)
    status: Optional[Status] = None
    cover_design: Optional[str] = None
    cover_image: Optional[str] = None
    target_audience: Optional[str] = None

class ManuscriptAdminUpdate(ManuscriptUpdate):
    """Editorial update; adds the fields only staff may write."""
    feedback: Optional[str] = None
    editor_notes: Optional[str] = None
    progress_stage: Optional[int] = None
    estimated_completion_date: Optional[datetime.datetime] = None

class ManuscriptSchema(ORMCamelModel):
    id: int
    author_id: int
    title: str
    content: Optional[str] = None
    description: Optional[str] = None
    genre: Optional[str] = None
    word_count: Optional[int] = None
    status: str
    cover_design: Optional[str] = None
    cover_image: Optional[str] = None
    feedback: Optional[str] = None
    editor_notes: Optional[str] = None
    target_audience: Optional[str] = None
    progress_stage: Optional[int] = None
    estimated_completion_date: Optional[datetime.datetime] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None
