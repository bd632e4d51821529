"""Participant counter reconciliation and the capacity guard.

``programs.current_participants`` is a cached aggregate of the registrations
whose ``registration_status`` is ``passed``. It is not kept in sync by
triggers: callers reconcile explicitly, either for one program or for all of
them at once.
"""

import logging

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from intern_admin.errors import CapacityBelowEnrollmentError, StorageError
from intern_admin.models.program import Program
from intern_admin.models.registration import Registration
from intern_admin.utils.status import PASSED

logger = logging.getLogger(__name__)


def _passed_count(program_id):
    return (
        select(func.count(Registration.id))
        .where(
            Registration.program_id == program_id,
            Registration.registration_status == PASSED,
        )
        .scalar_subquery()
    )


def reconcile_one(db: Session, program_id: int) -> int:
    """Recompute ``current_participants`` for a single program.

    Runs as one ``UPDATE ... SET current_participants = (SELECT COUNT(*) ...)``
    statement inside the caller's transaction; the caller commits. Returns the
    number of program rows affected, 0 when the program does not exist.
    """
    try:
        db.flush()
        result = db.execute(
            update(Program)
            .where(Program.id == program_id)
            .values(current_participants=_passed_count(program_id))
            .execution_options(synchronize_session=False)
        )
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("[participants] reconcile failed for program %s", program_id)
        raise StorageError() from exc
    return result.rowcount


def reconcile_one_and_commit(db: Session, program_id: int) -> int:
    affected = reconcile_one(db, program_id)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("[participants] commit failed for program %s", program_id)
        raise StorageError() from exc
    logger.info("[participants] program %s reconciled (rows=%s)", program_id, affected)
    return affected


def reconcile_all(db: Session) -> int:
    """Recompute ``current_participants`` for every program.

    The whole recompute is a single correlated UPDATE committed as one
    transaction, so a failure leaves every counter untouched.
    """
    try:
        db.flush()
        result = db.execute(
            update(Program)
            .values(current_participants=_passed_count(Program.id))
            .execution_options(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("[participants] reconcile_all failed")
        raise StorageError() from exc
    logger.info("[participants] reconciled %s programs", result.rowcount)
    return result.rowcount


def check_capacity_change(db: Session, program_id: int, new_capacity: int | None, lock: bool = False) -> None:
    """Reject a capacity below the program's enrolled participant count.

    ``None`` means the capacity is not being changed and skips the check. With
    ``lock=True`` the program row is read ``FOR UPDATE`` so the caller can
    validate and write within one transaction.
    """
    if new_capacity is None:
        return

    query = db.query(Program.current_participants).filter(Program.id == program_id)
    if lock:
        query = query.with_for_update()
    row = query.first()
    if row is None:
        return

    current = row.current_participants or 0
    if new_capacity < current:
        logger.warning(
            "[participants] capacity %s rejected for program %s (enrolled=%s)",
            new_capacity, program_id, current,
        )
        raise CapacityBelowEnrollmentError(current_participants=current, requested_capacity=new_capacity)
