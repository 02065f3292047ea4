"""
User model for admin and client accounts.
"""
from sqlalchemy import Column, String, Boolean, Enum as SQLEnum
from sqlalchemy.orm import relationship
from app.db.base import BaseModel
import enum


class UserRole(str, enum.Enum):
    """Account role enumeration."""
    ADMIN = "admin"
    CLIENT = "client"


class User(BaseModel):
    """User model with immutable username."""
    __tablename__ = "users"

    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(SQLEnum(UserRole), default=UserRole.CLIENT, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    galleries = relationship("ClientGallery", back_populates="user")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
