"""
User accounts for dashboard sign-in.
"""
from sqlalchemy import Column, String, DateTime

from stockroom.core.database import Base, new_id, utcnow


class User(Base):
    """Model for users."""
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(200), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
