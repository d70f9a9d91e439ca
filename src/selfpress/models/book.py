"""
ORM model for the Book entity.
A published work with a price in minor currency units and a derived
rating aggregate maintained from its reviews.
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, CheckConstraint, func
from sqlalchemy.orm import relationship
from selfpress.db.session import Base

class Book(Base):
    """
    A book in the store.

    Attributes:
        id (int): Primary key.
        title (str): Title.
        author_id (int): Owning author; NULL for orphaned books.
        author_name (str): Display name of the author.
        description (str): Synopsis.
        cover_image (str): Cover image reference.
        price (int): Price in minor currency units (cents).
        genre (str): Genre label.
        published_date (datetime): Publication time.
        rating (int): Rounded mean of all review ratings, 0 without reviews.
        review_count (int): Number of reviews.
        rating_total (int): Sum of all review ratings.
        is_downloadable (bool): Offered as a digital download.
    """
    __tablename__ = "books"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), index=True, nullable=False)
    author_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    author_name = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    cover_image = Column(String(512), nullable=True)
    price = Column(Integer, nullable=False)
    genre = Column(String(100), index=True, nullable=True)
    published_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    rating = Column(Integer, default=0, server_default="0", nullable=False)
    review_count = Column(Integer, default=0, server_default="0", nullable=False)
    rating_total = Column(Integer, default=0, server_default="0", nullable=False)
    is_downloadable = Column(Boolean, default=True, nullable=False)

    author = relationship("User", back_populates="books")
    reviews = relationship(
        "Review",
        back_populates="book",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint('price >= 0', name='book_price_check'),
    )

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title='{self.title[:30]}...', price={self.price})>"
