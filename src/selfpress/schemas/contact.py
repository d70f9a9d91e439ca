import datetime
from typing import Optional

from pydantic import EmailStr, Field

from .base import CamelModel, ORMCamelModel

class ContactCreate(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    subject: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)

class ContactSchema(ORMCamelModel):
    id: int
    name: str
    email: str
    subject: str
    message: str
    created_at: Optional[datetime.datetime] = None

class ContactReceipt(CamelModel):
    message: str = "Message sent successfully"
    id: int
