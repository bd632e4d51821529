"""Pydantic schemas for program requests and responses."""

from pydantic import BaseModel, Field, NonNegativeInt
from typing import Optional, List
from datetime import datetime


class ProgramBase(BaseModel):
    category_id: Optional[int] = None
    name: str
    description: Optional[str] = None
    requirements: Optional[str] = None
    requirements_text: Optional[str] = None
    schedule: Optional[str] = None
    duration: Optional[str] = None
    capacity: NonNegativeInt
    contact_info: Optional[str] = None
    status: str = "active"
    location: Optional[str] = None
    training_cost: Optional[float] = None
    training_fee_details: Optional[str] = None
    departure_cost: Optional[float] = None
    departure_fee_details: Optional[str] = None
    installment_plan: Optional[str] = None
    bridge_fund: Optional[str] = None
    timeline_text: Optional[str] = None


class ProgramCreate(ProgramBase):
    # current_participants is never accepted from clients; new programs start at 0.
    pass


class ProgramUpdate(BaseModel):
    """Full replacement of a program's mutable fields.

    Every field must be present in the request body; nullable columns accept an
    explicit ``null``. ``capacity`` may be ``null`` to keep the stored value,
    in which case the capacity guard is skipped.
    """

    category_id: Optional[int]
    name: str
    description: Optional[str]
    requirements: Optional[str]
    requirements_text: Optional[str]
    schedule: Optional[str]
    duration: Optional[str]
    capacity: Optional[NonNegativeInt]
    contact_info: Optional[str]
    status: str
    location: Optional[str]
    training_cost: Optional[float]
    training_fee_details: Optional[str]
    departure_cost: Optional[float]
    departure_fee_details: Optional[str]
    installment_plan: Optional[str]
    bridge_fund: Optional[str]
    timeline_text: Optional[str]


class ProgramOut(ProgramBase):
    id: int
    current_participants: int
    category_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class RelatedProgramOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    duration: Optional[str] = None
    training_cost: Optional[float] = None
    departure_cost: Optional[float] = None
    installment_plan: Optional[str] = None

    model_config = {"from_attributes": True}


class ProgramDetailOut(ProgramOut):
    related_programs: List[RelatedProgramOut] = Field(default_factory=list)


class SyncResultOut(BaseModel):
    updated_count: int
