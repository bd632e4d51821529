"""User domain SQLAlchemy models."""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from intern_admin.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(100), unique=True, nullable=False)
    full_name = Column(String(100), nullable=False)
    phone = Column(String(20))
    address = Column(String(255))
    user_type = Column(String(20), default="participant")  # admin/participant
    created_at = Column(DateTime, server_default=func.now())

    registrations = relationship("Registration", back_populates="user")
