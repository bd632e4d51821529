"""Program domain SQLAlchemy models."""

from sqlalchemy import Column, Integer, String, Text, DateTime, Numeric, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from intern_admin.database import Base


class ProgramCategory(Base):
    __tablename__ = "program_categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    created_at = Column(DateTime, server_default=func.now())

    programs = relationship("Program", back_populates="category")


class Program(Base):
    __tablename__ = "programs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    category_id = Column(Integer, ForeignKey("program_categories.id"))
    name = Column(String(200), nullable=False)
    description = Column(Text)
    requirements = Column(Text)
    requirements_text = Column(Text)
    schedule = Column(String(200))
    duration = Column(String(50))
    capacity = Column(Integer, nullable=False, default=0)
    # Cached count of registrations with status "passed"; see participant_service.
    current_participants = Column(Integer, nullable=False, default=0)
    contact_info = Column(Text)
    status = Column(String(20), default="active")  # active/inactive/closed
    location = Column(String(200))
    training_cost = Column(Numeric(15, 2, asdecimal=False))
    training_fee_details = Column(Text)
    departure_cost = Column(Numeric(15, 2, asdecimal=False))
    departure_fee_details = Column(Text)
    installment_plan = Column(String(50))  # none/4_installments/6_installments
    bridge_fund = Column(String(255))
    timeline_text = Column(Text)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    category = relationship("ProgramCategory", back_populates="programs")
    # program_service.delete_program removes dependent rows explicitly.
    registrations = relationship("Registration", back_populates="program", passive_deletes=True)

    __table_args__ = (
        Index("idx_program_status", "status"),
        Index("idx_program_category", "category_id"),
        {"sqlite_autoincrement": True},
    )

    @property
    def category_name(self):
        return self.category.name if self.category else None

    @property
    def related_programs(self):
        return getattr(self, "_related_programs", [])
