"""Selection API router. Validates requests and delegates to the service layer."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from intern_admin.database import get_db
from intern_admin.schemas.common import Envelope
from intern_admin.schemas.selection import (
    BulkUpdateOut, SelectionBulkUpdate, SelectionOut, SelectionStatisticsOut, SelectionUpdate,
)
from intern_admin.services import selection_service

router = APIRouter(prefix="/api/selection", tags=["selection"])


@router.get("", response_model=Envelope[List[SelectionOut]], response_model_exclude_unset=True)
def list_selections(
    program: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return {
        "success": True,
        "data": selection_service.list_selections(db, program=program, status=status, search=search),
    }


@router.get("/statistics", response_model=Envelope[SelectionStatisticsOut], response_model_exclude_unset=True)
def get_statistics(db: Session = Depends(get_db)):
    return {"success": True, "data": selection_service.get_statistics(db)}


@router.post("/bulk-update", response_model=Envelope[BulkUpdateOut], response_model_exclude_unset=True)
def bulk_update(data: SelectionBulkUpdate, db: Session = Depends(get_db)):
    results = selection_service.bulk_update_selection(db, data)
    summary = selection_service.summarize_bulk_results(results)
    return {
        "success": True,
        "message": f"Selection status updated for {summary['processed']} candidates",
        "data": summary,
    }


@router.put("/{registration_id}", response_model=Envelope, response_model_exclude_unset=True)
def update_selection(registration_id: int, data: SelectionUpdate, db: Session = Depends(get_db)):
    selection_service.update_selection(db, registration_id, data)
    return {"success": True, "message": "Selection status updated successfully"}
