"""Participant counter reconciliation and capacity guard."""

import pytest
from sqlalchemy.exc import OperationalError

from intern_admin.errors import CapacityBelowEnrollmentError, StorageError
from intern_admin.models.program import Program
from intern_admin.services import participant_service


def _participants(db, program_id):
    return db.query(Program.current_participants).filter(Program.id == program_id).scalar()


def test_reconcile_one_counts_only_passed_registrations(db, seed_users, seed_program, make_registration):
    make_registration(seed_program, seed_users["alice"], status="passed")
    make_registration(seed_program, seed_users["budi"], status="passed")
    make_registration(seed_program, seed_users["citra"], status="failed")
    make_registration(seed_program, seed_users["dian"], status="pending")

    affected = participant_service.reconcile_one_and_commit(db, seed_program.id)

    assert affected == 1
    assert _participants(db, seed_program.id) == 2


def test_reconcile_one_ignores_other_programs(db, seed_users, make_program, make_registration):
    first = make_program("First")
    second = make_program("Second")
    make_registration(first, seed_users["alice"], status="passed")
    make_registration(second, seed_users["budi"], status="passed")
    make_registration(second, seed_users["citra"], status="passed")

    participant_service.reconcile_one_and_commit(db, first.id)

    assert _participants(db, first.id) == 1
    assert _participants(db, second.id) == 0


def test_reconcile_one_unknown_program_affects_no_rows(db, seed_program):
    assert participant_service.reconcile_one_and_commit(db, 9999) == 0


def test_reconcile_one_overwrites_stale_counter(db, seed_users, make_program, make_registration):
    program = make_program("Stale", current_participants=7)
    make_registration(program, seed_users["alice"], status="passed")

    participant_service.reconcile_one_and_commit(db, program.id)

    assert _participants(db, program.id) == 1


def test_reconcile_all_updates_every_program(db, seed_users, make_program, make_registration):
    first = make_program("First", current_participants=5)
    second = make_program("Second")
    third = make_program("Third", status="inactive")
    make_registration(second, seed_users["alice"], status="passed")
    make_registration(second, seed_users["budi"], status="passed")
    make_registration(third, seed_users["citra"], status="passed")

    affected = participant_service.reconcile_all(db)

    assert affected == 3
    assert _participants(db, first.id) == 0
    assert _participants(db, second.id) == 2
    assert _participants(db, third.id) == 1


def test_reconcile_all_is_idempotent(db, seed_users, make_program, make_registration):
    first = make_program("First")
    second = make_program("Second")
    make_registration(first, seed_users["alice"], status="passed")
    make_registration(second, seed_users["budi"], status="pending")

    participant_service.reconcile_all(db)
    before = {p: _participants(db, p) for p in (first.id, second.id)}
    participant_service.reconcile_all(db)
    after = {p: _participants(db, p) for p in (first.id, second.id)}

    assert before == after == {first.id: 1, second.id: 0}


def test_reconcile_all_storage_failure(db, seed_program, monkeypatch):
    def _fail(*args, **kwargs):
        raise OperationalError("UPDATE programs", {}, Exception("database is locked"))

    monkeypatch.setattr(db, "execute", _fail)

    with pytest.raises(StorageError) as exc_info:
        participant_service.reconcile_all(db)
    assert exc_info.value.status_code == 500


def test_check_capacity_change_skipped_when_capacity_omitted(db, seed_program):
    seed_program.current_participants = 8
    db.commit()

    participant_service.check_capacity_change(db, seed_program.id, None)


def test_check_capacity_change_rejects_below_enrollment(db, seed_program):
    seed_program.current_participants = 8
    db.commit()

    with pytest.raises(CapacityBelowEnrollmentError) as exc_info:
        participant_service.check_capacity_change(db, seed_program.id, 5)

    assert exc_info.value.current_participants == 8
    assert exc_info.value.requested_capacity == 5
    assert "8" in exc_info.value.detail


def test_check_capacity_change_accepts_equal_or_greater(db, seed_program):
    seed_program.current_participants = 8
    db.commit()

    participant_service.check_capacity_change(db, seed_program.id, 8)
    participant_service.check_capacity_change(db, seed_program.id, 20, lock=True)
