"""Registration service layer: listing, enrolment, deletion and status changes.

Every write that can change which registrations count as ``passed`` for a
program reconciles that program's participant counter before committing.
"""

import logging
import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, or_, select
from sqlalchemy.orm import Session

from intern_admin.errors import InvalidInputError, NotFoundError
from intern_admin.models.program import Program
from intern_admin.models.registration import Registration, RegistrationStatusHistory
from intern_admin.models.selection import SelectionStatus
from intern_admin.models.user import User
from intern_admin.schemas.registration import RegistrationCreate, RegistrationStatusUpdate
from intern_admin.services import participant_service
from intern_admin.utils.status import PENDING, VALID_STATUSES, is_filter_value, normalize_status

logger = logging.getLogger(__name__)

NO_SELECTION = "no_selection"


def _registration_query(db: Session):
    return (
        db.query(
            Registration,
            User.full_name,
            User.email,
            User.phone,
            Program.name.label("program_name"),
            SelectionStatus.status.label("selection_status"),
            SelectionStatus.notes.label("selection_notes"),
        )
        .outerjoin(User, Registration.user_id == User.id)
        .outerjoin(Program, Registration.program_id == Program.id)
        .outerjoin(SelectionStatus, SelectionStatus.registration_id == Registration.id)
    )


def _registration_row_to_dict(row) -> dict:
    registration = row[0]
    return {
        "id": registration.id,
        "registration_code": registration.registration_code,
        "user_id": registration.user_id,
        "program_id": registration.program_id,
        "registration_status": registration.registration_status,
        "created_at": registration.created_at,
        "updated_at": registration.updated_at,
        "full_name": row.full_name,
        "email": row.email,
        "phone": row.phone,
        "program_name": row.program_name,
        "selection_status": row.selection_status,
        "selection_notes": row.selection_notes,
    }


def list_registrations(
    db: Session,
    program: Optional[str] = None,
    status: Optional[str] = None,
    selection_status: Optional[str] = None,
    search: Optional[str] = None,
) -> List[dict]:
    """List registrations with applicant, program and selection columns.

    ``selection_status="no_selection"`` matches registrations that never
    entered the selection phase. ``search`` matches applicant name, email,
    phone, registration code or program name.
    """
    query = _registration_query(db)

    if is_filter_value(program):
        try:
            program_id = int(str(program).strip())
        except ValueError:
            raise InvalidInputError("program must be a numeric id or 'all'")
        query = query.filter(Registration.program_id == program_id)

    if is_filter_value(status):
        query = query.filter(Registration.registration_status == normalize_status(status))

    if is_filter_value(selection_status):
        if normalize_status(selection_status) == NO_SELECTION:
            query = query.filter(SelectionStatus.id.is_(None))
        else:
            query = query.filter(SelectionStatus.status == normalize_status(selection_status))

    term = str(search or "").strip()
    if term:
        query = query.filter(
            or_(
                User.full_name.icontains(term, autoescape=True),
                User.email.icontains(term, autoescape=True),
                User.phone.icontains(term, autoescape=True),
                Registration.registration_code.icontains(term, autoescape=True),
                Program.name.icontains(term, autoescape=True),
            )
        )

    rows = query.order_by(Registration.created_at.desc(), Registration.id.desc()).all()
    return [_registration_row_to_dict(row) for row in rows]


def get_registration(db: Session, registration_id: int) -> dict:
    row = _registration_query(db).filter(Registration.id == registration_id).first()
    if not row:
        raise NotFoundError("Registration not found")
    return _registration_row_to_dict(row)


def generate_registration_code() -> str:
    return f"REG-{datetime.now():%Y%m%d}-{uuid.uuid4().hex[:8].upper()}"


def create_registration(db: Session, data: RegistrationCreate) -> dict:
    """Enrol a user in an active program and open their selection record."""
    user = db.query(User).filter(User.id == data.user_id).first()
    if not user:
        raise NotFoundError("User not found")

    program = (
        db.query(Program)
        .filter(Program.id == data.program_id, Program.status == "active")
        .with_for_update()
        .first()
    )
    if not program:
        raise NotFoundError("Program not found or inactive")
    if (program.current_participants or 0) >= (program.capacity or 0):
        db.rollback()
        raise InvalidInputError("Program quota is full")

    existing = (
        db.query(Registration.id)
        .filter(Registration.user_id == data.user_id, Registration.program_id == data.program_id)
        .first()
    )
    if existing:
        db.rollback()
        raise InvalidInputError("User is already registered for this program")

    registration = Registration(
        registration_code=generate_registration_code(),
        user_id=data.user_id,
        program_id=data.program_id,
        registration_status=PENDING,
    )
    db.add(registration)
    db.flush()
    db.add(SelectionStatus(registration_id=registration.id, status=PENDING))
    participant_service.reconcile_one(db, data.program_id)
    db.commit()

    logger.info(
        "[registrations] user %s registered for program %s as %s",
        data.user_id, data.program_id, registration.registration_code,
    )
    return {
        "registration_id": registration.id,
        "registration_code": registration.registration_code,
        "program_id": data.program_id,
    }


def delete_registration_rows(db: Session, *criteria) -> int:
    """Delete registrations matching ``criteria`` with their dependent rows.

    Runs inside the caller's transaction. Selection records and status
    history go first so no row is left pointing at a removed registration.
    """
    registration_ids = select(Registration.id).where(*criteria)
    db.execute(
        delete(SelectionStatus)
        .where(SelectionStatus.registration_id.in_(registration_ids))
        .execution_options(synchronize_session=False)
    )
    db.execute(
        delete(RegistrationStatusHistory)
        .where(RegistrationStatusHistory.registration_id.in_(registration_ids))
        .execution_options(synchronize_session=False)
    )
    result = db.execute(
        delete(Registration).where(*criteria).execution_options(synchronize_session=False)
    )
    return result.rowcount


def delete_registration(db: Session, registration_id: int) -> dict:
    registration = db.query(Registration).filter(Registration.id == registration_id).first()
    if not registration:
        raise NotFoundError("Registration not found")

    program_id = registration.program_id
    delete_registration_rows(db, Registration.id == registration_id)
    participant_service.reconcile_one(db, program_id)
    db.commit()

    participants = db.query(Program.current_participants).filter(Program.id == program_id).scalar()
    logger.info("[registrations] deleted registration %s (program %s participants=%s)",
                registration_id, program_id, participants)
    return {"registration_id": registration_id, "program_id": program_id, "program_participants": participants}


def update_registration_status(db: Session, registration_id: int, data: RegistrationStatusUpdate) -> dict:
    """Change a registration's status and reconcile its program's counter.

    The status change, the history entry and the participant recount are
    committed together.
    """
    status = normalize_status(data.status)
    if status not in VALID_STATUSES:
        raise InvalidInputError(f"Invalid status. Use: {', '.join(VALID_STATUSES)}")

    registration = db.query(Registration).filter(Registration.id == registration_id).first()
    if not registration:
        raise NotFoundError("Registration not found")

    old_status = registration.registration_status
    program_id = registration.program_id
    if old_status == status:
        return {"registration_id": registration_id, "registration_status": status, "changed": False}

    registration.registration_status = status
    db.add(RegistrationStatusHistory(
        registration_id=registration_id,
        old_status=old_status,
        new_status=status,
        notes=data.notes,
        changed_by=data.changed_by,
    ))
    participant_service.reconcile_one(db, program_id)
    db.commit()

    participants = db.query(Program.current_participants).filter(Program.id == program_id).scalar()
    logger.info(
        "[registrations] registration %s: %s -> %s (program %s participants=%s)",
        registration_id, old_status, status, program_id, participants,
    )
    return {
        "registration_id": registration_id,
        "registration_status": status,
        "changed": True,
        "program_participants": participants,
    }
