from sqlalchemy import Column, Integer, String, Text, DateTime, func
from selfpress.db.session import Base

class Contact(Base):
    """A support message sent through the contact form."""
    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<Contact(id={self.id}, subject='{self.subject[:30]}')>"
