"""Programs API router. Validates requests and delegates to the service layer."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from intern_admin.database import get_db
from intern_admin.schemas.common import CreatedId, Envelope
from intern_admin.schemas.program import (
    ProgramCreate, ProgramDetailOut, ProgramOut, ProgramUpdate, SyncResultOut,
)
from intern_admin.services import program_service

router = APIRouter(prefix="/api/programs", tags=["programs"])


@router.get("", response_model=Envelope[List[ProgramOut]], response_model_exclude_unset=True)
def list_programs(db: Session = Depends(get_db)):
    return {"success": True, "data": program_service.get_active_programs(db)}


@router.post("/sync-participants", response_model=Envelope[SyncResultOut], response_model_exclude_unset=True)
def sync_participants(db: Session = Depends(get_db)):
    updated_count = program_service.sync_all_participants(db)
    return {
        "success": True,
        "message": f"Participant counts synchronized for {updated_count} programs",
        "data": {"updated_count": updated_count},
    }


@router.get("/{program_id}", response_model=Envelope[ProgramDetailOut], response_model_exclude_unset=True)
def get_program(program_id: int, db: Session = Depends(get_db)):
    return {"success": True, "data": program_service.get_program(db, program_id)}


@router.post(
    "",
    response_model=Envelope[CreatedId],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
def create_program(data: ProgramCreate, db: Session = Depends(get_db)):
    program = program_service.create_program(db, data)
    return {"success": True, "message": "Program created successfully", "data": {"id": program.id}}


@router.put("/{program_id}", response_model=Envelope, response_model_exclude_unset=True)
def update_program(program_id: int, data: ProgramUpdate, db: Session = Depends(get_db)):
    program_service.update_program(db, program_id, data)
    return {"success": True, "message": "Program updated successfully"}


@router.delete("/{program_id}", response_model=Envelope, response_model_exclude_unset=True)
def delete_program(program_id: int, db: Session = Depends(get_db)):
    program_service.delete_program(db, program_id)
    return {"success": True, "message": "Program deleted successfully"}


@router.post(
    "/{program_id}/sync-participants",
    response_model=Envelope[ProgramOut],
    response_model_exclude_unset=True,
)
def sync_program_participants(program_id: int, db: Session = Depends(get_db)):
    program = program_service.sync_program_participants(db, program_id)
    return {
        "success": True,
        "message": f"Program has {program.current_participants} enrolled participants",
        "data": program,
    }
