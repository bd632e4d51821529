"""Selection status SQLAlchemy model."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from intern_admin.database import Base


class SelectionStatus(Base):
    __tablename__ = "selection_status"

    id = Column(Integer, primary_key=True, autoincrement=True)
    registration_id = Column(Integer, ForeignKey("registrations.id", ondelete="CASCADE"), unique=True, nullable=False)
    status = Column(String(20), nullable=False, default="pending")  # pending/passed/failed
    notes = Column(Text)
    # evaluated_by and evaluated_at stay NULL until the first evaluation.
    evaluated_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    evaluated_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    registration = relationship("Registration", back_populates="selection")
    evaluator = relationship("User", foreign_keys=[evaluated_by])
