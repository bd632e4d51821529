"""SQLAlchemy model package."""

from intern_admin.models.user import User
from intern_admin.models.program import Program, ProgramCategory
from intern_admin.models.registration import Registration, RegistrationStatusHistory
from intern_admin.models.selection import SelectionStatus

__all__ = [
    "User",
    "Program", "ProgramCategory",
    "Registration", "RegistrationStatusHistory",
    "SelectionStatus",
]
