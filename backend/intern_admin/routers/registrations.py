"""Registrations API router. Validates requests and delegates to the service layer."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from intern_admin.database import get_db
from intern_admin.schemas.common import Envelope
from intern_admin.schemas.registration import (
    RegistrationCreate, RegistrationCreatedOut, RegistrationDeletedOut, RegistrationOut,
    RegistrationStatusChangeOut, RegistrationStatusUpdate,
)
from intern_admin.services import registration_service

router = APIRouter(prefix="/api/registrations", tags=["registrations"])


@router.get("", response_model=Envelope[List[RegistrationOut]], response_model_exclude_unset=True)
def list_registrations(
    program: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    selection_status: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    data = registration_service.list_registrations(
        db, program=program, status=status, selection_status=selection_status, search=search,
    )
    return {"success": True, "data": data}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[RegistrationCreatedOut],
    response_model_exclude_unset=True,
)
def create_registration(data: RegistrationCreate, db: Session = Depends(get_db)):
    created = registration_service.create_registration(db, data)
    return {"success": True, "message": "Registration created successfully", "data": created}


@router.get("/{registration_id}", response_model=Envelope[RegistrationOut], response_model_exclude_unset=True)
def get_registration(registration_id: int, db: Session = Depends(get_db)):
    return {"success": True, "data": registration_service.get_registration(db, registration_id)}


@router.delete(
    "/{registration_id}",
    response_model=Envelope[RegistrationDeletedOut],
    response_model_exclude_unset=True,
)
def delete_registration(registration_id: int, db: Session = Depends(get_db)):
    deleted = registration_service.delete_registration(db, registration_id)
    return {"success": True, "message": "Registration deleted successfully", "data": deleted}


@router.put(
    "/{registration_id}/registration-status",
    response_model=Envelope[RegistrationStatusChangeOut],
    response_model_exclude_unset=True,
)
def update_registration_status(
    registration_id: int,
    data: RegistrationStatusUpdate,
    db: Session = Depends(get_db),
):
    result = registration_service.update_registration_status(db, registration_id, data)
    message = (
        "Registration status updated successfully"
        if result["changed"]
        else "Registration status unchanged"
    )
    return {"success": True, "message": message, "data": result}
