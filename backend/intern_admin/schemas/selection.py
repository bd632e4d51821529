"""Pydantic schemas for the selection workflow."""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class SelectionUpdate(BaseModel):
    status: str
    notes: Optional[str] = None
    evaluated_by: Optional[int] = None


class SelectionBulkUpdate(SelectionUpdate):
    registration_ids: Optional[List[int]] = None


class SelectionOut(BaseModel):
    id: int
    registration_id: int
    status: str
    notes: Optional[str] = None
    evaluated_by: Optional[int] = None
    evaluated_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    registration_code: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    program_id: Optional[int] = None
    program_name: Optional[str] = None
    evaluated_by_name: Optional[str] = None


class BulkUpdateOut(BaseModel):
    processed: int
    updated: int
    missing_ids: List[int] = Field(default_factory=list)


class SelectionCounts(BaseModel):
    total_candidates: int
    pending_selection: int
    passed_final: int
    failed: int


class RecentEvaluationOut(BaseModel):
    id: int
    registration_id: int
    status: str
    notes: Optional[str] = None
    evaluated_by: Optional[int] = None
    evaluated_at: Optional[datetime] = None
    full_name: Optional[str] = None
    program_name: Optional[str] = None


class SelectionStatisticsOut(BaseModel):
    statistics: SelectionCounts
    recent_evaluations: List[RecentEvaluationOut]
