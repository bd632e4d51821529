"""Program service layer: listing, detail, create/update/delete and counter sync."""

import logging
from typing import List

from sqlalchemy import func, update
from sqlalchemy.orm import Session, joinedload

from intern_admin.errors import CapacityBelowEnrollmentError, HasEnrolledParticipantsError, NotFoundError
from intern_admin.models.program import Program
from intern_admin.models.registration import Registration
from intern_admin.schemas.program import ProgramCreate, ProgramUpdate
from intern_admin.services import participant_service, registration_service

logger = logging.getLogger(__name__)

ACTIVE = "active"
RELATED_PROGRAM_LIMIT = 3


def get_active_programs(db: Session) -> List[Program]:
    return (
        db.query(Program)
        .options(joinedload(Program.category))
        .filter(Program.status == ACTIVE)
        .order_by(Program.created_at.desc(), Program.id.desc())
        .all()
    )


def get_program(db: Session, program_id: int) -> Program:
    program = (
        db.query(Program)
        .options(joinedload(Program.category))
        .filter(Program.id == program_id)
        .first()
    )
    if not program:
        raise NotFoundError("Program not found")
    program._related_programs = get_related_programs(db, program)
    return program


def get_related_programs(db: Session, program: Program) -> List[Program]:
    if program.category_id is None:
        return []
    return (
        db.query(Program)
        .filter(
            Program.category_id == program.category_id,
            Program.id != program.id,
            Program.status == ACTIVE,
        )
        .order_by(Program.id)
        .limit(RELATED_PROGRAM_LIMIT)
        .all()
    )


def create_program(db: Session, data: ProgramCreate) -> Program:
    program = Program(**data.model_dump(), current_participants=0)
    db.add(program)
    db.commit()
    db.refresh(program)
    logger.info("[programs] created program %s", program.id)
    return program


def update_program(db: Session, program_id: int, data: ProgramUpdate) -> int:
    """Overwrite every mutable column of a program.

    The capacity guard and the write share one transaction with the program row
    locked. Returns the number of rows written; an unknown id writes nothing and
    is not treated as an error.
    """
    payload = data.model_dump()
    try:
        participant_service.check_capacity_change(db, program_id, payload.get("capacity"), lock=True)
    except CapacityBelowEnrollmentError:
        db.rollback()
        raise
    if payload.get("capacity") is None:
        payload.pop("capacity")

    result = db.execute(
        update(Program)
        .where(Program.id == program_id)
        .values(**payload, updated_at=func.now())
        .execution_options(synchronize_session=False)
    )
    db.commit()
    if result.rowcount == 0:
        logger.info("[programs] update matched no program for id %s", program_id)
    return result.rowcount


def delete_program(db: Session, program_id: int):
    program = db.query(Program).filter(Program.id == program_id).with_for_update().first()
    if not program:
        raise NotFoundError("Program not found")
    enrolled = program.current_participants or 0
    if enrolled > 0:
        db.rollback()
        logger.warning("[programs] delete blocked for program %s (enrolled=%s)", program_id, enrolled)
        raise HasEnrolledParticipantsError(enrolled)
    removed = registration_service.delete_registration_rows(db, Registration.program_id == program_id)
    db.delete(program)
    db.commit()
    logger.info("[programs] deleted program %s with %s registrations", program_id, removed)


def sync_all_participants(db: Session) -> int:
    return participant_service.reconcile_all(db)


def sync_program_participants(db: Session, program_id: int) -> Program:
    if participant_service.reconcile_one_and_commit(db, program_id) == 0:
        raise NotFoundError("Program not found")
    return get_program(db, program_id)
