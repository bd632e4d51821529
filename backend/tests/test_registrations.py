"""Registration status changes keep the program participant counter in sync."""

from intern_admin.models.program import Program
from intern_admin.models.registration import Registration, RegistrationStatusHistory
from intern_admin.models.selection import SelectionStatus


def _participants(db, program_id):
    return db.query(Program.current_participants).filter(Program.id == program_id).scalar()


def test_status_change_reconciles_program_counter(client, db, seed_users, seed_program, make_registration):
    first = make_registration(seed_program, seed_users["alice"])
    second = make_registration(seed_program, seed_users["budi"], status="passed")

    resp = client.put(
        f"/api/registrations/{first.id}/registration-status",
        json={"status": "passed", "notes": "Interview passed", "changed_by": seed_users["admin"].id},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Registration status updated successfully"
    assert body["data"] == {
        "registration_id": first.id,
        "registration_status": "passed",
        "changed": True,
        "program_participants": 2,
    }
    assert _participants(db, seed_program.id) == 2

    resp = client.put(f"/api/registrations/{second.id}/registration-status", json={"status": "failed"})
    assert resp.json()["data"]["program_participants"] == 1
    assert _participants(db, seed_program.id) == 1


def test_status_change_writes_history(client, db, seed_users, seed_program, make_registration):
    registration = make_registration(seed_program, seed_users["alice"])

    client.put(
        f"/api/registrations/{registration.id}/registration-status",
        json={"status": "failed", "notes": "Incomplete documents", "changed_by": seed_users["admin"].id},
    )

    history = db.query(RegistrationStatusHistory).filter(
        RegistrationStatusHistory.registration_id == registration.id
    ).all()
    assert len(history) == 1
    assert history[0].old_status == "pending"
    assert history[0].new_status == "failed"
    assert history[0].notes == "Incomplete documents"
    assert history[0].changed_by == seed_users["admin"].id


def test_same_status_is_a_no_op(client, db, seed_users, seed_program, make_registration):
    registration = make_registration(seed_program, seed_users["alice"], status="passed")

    resp = client.put(f"/api/registrations/{registration.id}/registration-status", json={"status": "passed"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Registration status unchanged"
    assert body["data"]["changed"] is False
    assert "program_participants" not in body["data"]
    assert db.query(RegistrationStatusHistory).count() == 0


def test_status_change_validation(client, seed_users, seed_program, make_registration):
    registration = make_registration(seed_program, seed_users["alice"])

    resp = client.put(f"/api/registrations/{registration.id}/registration-status", json={"status": "accepted"})
    assert resp.status_code == 400
    assert resp.json()["success"] is False

    resp = client.put("/api/registrations/9999/registration-status", json={"status": "passed"})
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "message": "Registration not found"}


def test_get_registration_detail(client, db, seed_users, seed_program, make_registration):
    registration = make_registration(seed_program, seed_users["alice"], code="REG-DETAIL", selection="pending")

    resp = client.get(f"/api/registrations/{registration.id}")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["registration_code"] == "REG-DETAIL"
    assert data["full_name"] == "Alice Smith"
    assert data["program_name"] == "Program Regular"
    assert data["selection_status"] == "pending"
    assert db.query(Registration).count() == 1

    assert client.get("/api/registrations/9999").status_code == 404


def test_create_registration_opens_selection_record(client, db, seed_users, seed_program):
    resp = client.post(
        "/api/registrations",
        json={"user_id": seed_users["alice"].id, "program_id": seed_program.id},
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Registration created successfully"
    data = body["data"]
    assert data["registration_code"].startswith("REG-")
    assert data["program_id"] == seed_program.id

    registration = db.query(Registration).filter(Registration.id == data["registration_id"]).first()
    assert registration.registration_status == "pending"
    assert registration.user_id == seed_users["alice"].id
    selection = db.query(SelectionStatus).filter(SelectionStatus.registration_id == registration.id).first()
    assert selection.status == "pending"
    assert selection.evaluated_at is None
    assert _participants(db, seed_program.id) == 0

    listed = client.get("/api/selection", params={"program": str(seed_program.id)}).json()["data"]
    assert [item["registration_id"] for item in listed] == [registration.id]


def test_create_registration_rejects_duplicates(client, seed_users, seed_program):
    payload = {"user_id": seed_users["alice"].id, "program_id": seed_program.id}
    assert client.post("/api/registrations", json=payload).status_code == 201

    resp = client.post("/api/registrations", json=payload)
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": "User is already registered for this program"}


def test_create_registration_rejects_full_program(client, seed_users, make_program):
    program = make_program("Full", capacity=1, current_participants=1)

    resp = client.post("/api/registrations", json={"user_id": seed_users["alice"].id, "program_id": program.id})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Program quota is full"


def test_create_registration_requires_active_program_and_user(client, seed_users, make_program):
    closed = make_program("Closed", status="inactive")
    active = make_program("Open")

    resp = client.post("/api/registrations", json={"user_id": seed_users["alice"].id, "program_id": closed.id})
    assert resp.status_code == 404
    assert resp.json()["message"] == "Program not found or inactive"

    resp = client.post("/api/registrations", json={"user_id": 9999, "program_id": active.id})
    assert resp.status_code == 404
    assert resp.json()["message"] == "User not found"

    resp = client.post("/api/registrations", json={"user_id": seed_users["alice"].id})
    assert resp.status_code == 400
    assert "program_id" in resp.json()["message"]


def test_delete_registration_reconciles_program(client, db, seed_users, seed_program, make_registration):
    kept = make_registration(seed_program, seed_users["alice"], status="passed")
    removed = make_registration(seed_program, seed_users["budi"], selection="passed")
    client.put(f"/api/registrations/{removed.id}/registration-status", json={"status": "passed"})
    assert _participants(db, seed_program.id) == 2

    resp = client.delete(f"/api/registrations/{removed.id}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Registration deleted successfully"
    assert body["data"] == {
        "registration_id": removed.id,
        "program_id": seed_program.id,
        "program_participants": 1,
    }

    db.expire_all()
    assert _participants(db, seed_program.id) == 1
    assert db.query(Registration).filter(Registration.id == removed.id).count() == 0
    assert db.query(SelectionStatus).filter(SelectionStatus.registration_id == removed.id).count() == 0
    assert db.query(RegistrationStatusHistory).filter(
        RegistrationStatusHistory.registration_id == removed.id
    ).count() == 0
    assert db.query(Registration).filter(Registration.id == kept.id).count() == 1


def test_delete_registration_not_found(client):
    resp = client.delete("/api/registrations/9999")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "message": "Registration not found"}


def test_list_registrations_filters(client, seed_users, make_program, make_registration):
    regular = make_program("Program Regular")
    hybrid = make_program("Program Hybrid", category="hybrid")
    alice = make_registration(regular, seed_users["alice"], status="passed", selection="passed")
    budi = make_registration(regular, seed_users["budi"])
    citra = make_registration(hybrid, seed_users["citra"], selection="pending")

    resp = client.get("/api/registrations")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert {item["id"] for item in data} == {alice.id, budi.id, citra.id}
    by_id = {item["id"]: item for item in data}
    assert by_id[alice.id]["full_name"] == "Alice Smith"
    assert by_id[alice.id]["program_name"] == "Program Regular"
    assert by_id[alice.id]["selection_status"] == "passed"
    assert by_id[budi.id]["selection_status"] is None

    def ids(**params):
        return {item["id"] for item in client.get("/api/registrations", params=params).json()["data"]}

    assert ids(program=str(hybrid.id)) == {citra.id}
    assert ids(program="all", status="passed") == {alice.id}
    assert ids(selection_status="no_selection") == {budi.id}
    assert ids(selection_status="pending") == {citra.id}
    assert ids(search="hybrid") == {citra.id}
    assert ids(search="0822222") == {budi.id}

    resp = client.get("/api/registrations", params={"program": "regular"})
    assert resp.status_code == 400
