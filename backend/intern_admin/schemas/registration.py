"""Pydantic schemas for registrations and registration status changes."""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class RegistrationCreate(BaseModel):
    user_id: int
    program_id: int


class RegistrationStatusUpdate(BaseModel):
    status: str
    notes: Optional[str] = None
    changed_by: Optional[int] = None


class RegistrationOut(BaseModel):
    id: int
    registration_code: str
    user_id: int
    program_id: int
    registration_status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    program_name: Optional[str] = None
    selection_status: Optional[str] = None
    selection_notes: Optional[str] = None


class RegistrationCreatedOut(BaseModel):
    registration_id: int
    registration_code: str
    program_id: int


class RegistrationDeletedOut(BaseModel):
    registration_id: int
    program_id: int
    program_participants: Optional[int] = None


class RegistrationStatusChangeOut(BaseModel):
    registration_id: int
    registration_status: str
    changed: bool
    program_participants: Optional[int] = None
