"""Selection workflow service layer: filtered listing, status updates and statistics."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from sqlalchemy import case, func, or_, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, aliased

from intern_admin.errors import InvalidInputError, NotFoundError, StorageError
from intern_admin.models.program import Program
from intern_admin.models.registration import Registration
from intern_admin.models.selection import SelectionStatus
from intern_admin.models.user import User
from intern_admin.schemas.selection import SelectionBulkUpdate, SelectionUpdate
from intern_admin.utils.status import FAILED, PASSED, PENDING, VALID_STATUSES, is_filter_value, normalize_status

logger = logging.getLogger(__name__)

RECENT_EVALUATION_LIMIT = 5


@dataclass(frozen=True)
class BulkItemResult:
    registration_id: int
    updated: bool


def _validated_status(value: str) -> str:
    status = normalize_status(value)
    if status not in VALID_STATUSES:
        raise InvalidInputError(f"Invalid status. Use: {', '.join(VALID_STATUSES)}")
    return status


def _selection_query(db: Session):
    evaluator = aliased(User)
    return (
        db.query(
            SelectionStatus,
            Registration.registration_code,
            User.full_name,
            User.email,
            User.phone,
            Program.id.label("program_id"),
            Program.name.label("program_name"),
            evaluator.full_name.label("evaluated_by_name"),
        )
        .outerjoin(Registration, SelectionStatus.registration_id == Registration.id)
        .outerjoin(User, Registration.user_id == User.id)
        .outerjoin(Program, Registration.program_id == Program.id)
        .outerjoin(evaluator, SelectionStatus.evaluated_by == evaluator.id)
    )


def _selection_row_to_dict(row) -> dict:
    selection = row[0]
    return {
        "id": selection.id,
        "registration_id": selection.registration_id,
        "status": selection.status,
        "notes": selection.notes,
        "evaluated_by": selection.evaluated_by,
        "evaluated_at": selection.evaluated_at,
        "created_at": selection.created_at,
        "updated_at": selection.updated_at,
        "registration_code": row.registration_code,
        "full_name": row.full_name,
        "email": row.email,
        "phone": row.phone,
        "program_id": row.program_id,
        "program_name": row.program_name,
        "evaluated_by_name": row.evaluated_by_name,
    }


def list_selections(
    db: Session,
    program: Optional[str] = None,
    status: Optional[str] = None,
    search: Optional[str] = None,
) -> List[dict]:
    """List selection records joined with applicant, program and evaluator.

    ``program`` and ``status`` match exactly and treat empty or ``"all"`` as no
    filter. ``search`` is a case-insensitive substring match against the
    applicant's full name, email or the registration code.
    """
    query = _selection_query(db)

    if is_filter_value(program):
        try:
            program_id = int(str(program).strip())
        except ValueError:
            raise InvalidInputError("program must be a numeric id or 'all'")
        query = query.filter(Program.id == program_id)

    if is_filter_value(status):
        query = query.filter(SelectionStatus.status == normalize_status(status))

    term = str(search or "").strip()
    if term:
        query = query.filter(
            or_(
                User.full_name.icontains(term, autoescape=True),
                User.email.icontains(term, autoescape=True),
                Registration.registration_code.icontains(term, autoescape=True),
            )
        )

    rows = query.order_by(SelectionStatus.created_at.desc(), SelectionStatus.id.desc()).all()
    return [_selection_row_to_dict(row) for row in rows]


def update_selection(db: Session, registration_id: int, data: SelectionUpdate) -> SelectionStatus:
    status = _validated_status(data.status)
    selection = db.query(SelectionStatus).filter(SelectionStatus.registration_id == registration_id).first()
    if not selection:
        raise NotFoundError("Selection record not found")

    selection.status = status
    selection.notes = data.notes
    selection.evaluated_by = data.evaluated_by
    selection.evaluated_at = datetime.now()
    db.commit()
    db.refresh(selection)
    logger.info("[selection] registration %s set to %s", registration_id, status)
    return selection


def bulk_update_selection(db: Session, data: SelectionBulkUpdate) -> List[BulkItemResult]:
    """Apply one status/notes/evaluator update to many registrations.

    Each id is written by its own committed statement, in order, so a later
    failure does not undo earlier ids. Ids without a selection record are
    skipped and reported with ``updated=False``.
    """
    registration_ids = data.registration_ids
    if not registration_ids:
        raise InvalidInputError("No registration IDs provided")
    status = _validated_status(data.status)

    evaluated_at = datetime.now()
    results: List[BulkItemResult] = []
    for registration_id in registration_ids:
        try:
            result = db.execute(
                update(SelectionStatus)
                .where(SelectionStatus.registration_id == registration_id)
                .values(
                    status=status,
                    notes=data.notes,
                    evaluated_by=data.evaluated_by,
                    evaluated_at=evaluated_at,
                )
                .execution_options(synchronize_session=False)
            )
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("[selection] bulk update failed at registration %s", registration_id)
            raise StorageError() from exc
        updated = result.rowcount > 0
        if not updated:
            logger.info("[selection] bulk update skipped registration %s (no selection record)", registration_id)
        results.append(BulkItemResult(registration_id=registration_id, updated=updated))
    return results


def summarize_bulk_results(results: List[BulkItemResult]) -> dict:
    return {
        "processed": len(results),
        "updated": sum(1 for item in results if item.updated),
        "missing_ids": [item.registration_id for item in results if not item.updated],
    }


def get_statistics(db: Session) -> dict:
    def _count_status(value: str):
        return func.sum(case((SelectionStatus.status == value, 1), else_=0))

    totals = db.query(
        func.count(SelectionStatus.id),
        _count_status(PENDING),
        _count_status(PASSED),
        _count_status(FAILED),
    ).one()

    recent_rows = (
        db.query(SelectionStatus, User.full_name, Program.name.label("program_name"))
        .outerjoin(Registration, SelectionStatus.registration_id == Registration.id)
        .outerjoin(User, Registration.user_id == User.id)
        .outerjoin(Program, Registration.program_id == Program.id)
        .filter(SelectionStatus.evaluated_at.isnot(None))
        .order_by(SelectionStatus.evaluated_at.desc(), SelectionStatus.id.desc())
        .limit(RECENT_EVALUATION_LIMIT)
        .all()
    )

    return {
        "statistics": {
            "total_candidates": int(totals[0] or 0),
            "pending_selection": int(totals[1] or 0),
            "passed_final": int(totals[2] or 0),
            "failed": int(totals[3] or 0),
        },
        "recent_evaluations": [
            {
                "id": selection.id,
                "registration_id": selection.registration_id,
                "status": selection.status,
                "notes": selection.notes,
                "evaluated_by": selection.evaluated_by,
                "evaluated_at": selection.evaluated_at,
                "full_name": full_name,
                "program_name": program_name,
            }
            for selection, full_name, program_name in recent_rows
        ],
    }
