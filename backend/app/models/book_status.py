"""Trade status lookup table — configuration data, resolved by name."""

from sqlalchemy import Column, String, Integer

from app.database import Base


class BookStatus(Base):
    __tablename__ = "book_statuses"

    status_id = Column(Integer, primary_key=True, autoincrement=True)
    status_name = Column(String(50), unique=True, nullable=False)
