"""Registration domain SQLAlchemy models."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from intern_admin.database import Base


class Registration(Base):
    __tablename__ = "registrations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    registration_code = Column(String(50), unique=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    program_id = Column(Integer, ForeignKey("programs.id", ondelete="CASCADE"), nullable=False)
    registration_status = Column(String(20), nullable=False, default="pending")  # pending/passed/failed
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="registrations")
    program = relationship("Program", back_populates="registrations")
    selection = relationship("SelectionStatus", back_populates="registration", uselist=False)
    status_history = relationship(
        "RegistrationStatusHistory", back_populates="registration", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("idx_registration_program_status", "program_id", "registration_status"),
        {"sqlite_autoincrement": True},
    )


class RegistrationStatusHistory(Base):
    __tablename__ = "registration_status_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    registration_id = Column(Integer, ForeignKey("registrations.id", ondelete="CASCADE"), nullable=False)
    old_status = Column(String(20))
    new_status = Column(String(20), nullable=False)
    notes = Column(Text)
    changed_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    changed_at = Column(DateTime, server_default=func.now())

    registration = relationship("Registration", back_populates="status_history")
