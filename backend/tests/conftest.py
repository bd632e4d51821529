import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from intern_admin.database import Base, get_db
from intern_admin.main import app
from intern_admin.models.program import Program, ProgramCategory
from intern_admin.models.registration import Registration
from intern_admin.models.selection import SelectionStatus
from intern_admin.models.user import User

TEST_DB_URL = "sqlite:///./test_intern_registration.db"

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def seed_users(db):
    users = {
        "admin": User(email="admin@example.com", full_name="Administrator", user_type="admin"),
        "alice": User(email="alice@example.com", full_name="Alice Smith", phone="0811111", user_type="participant"),
        "budi": User(email="budi@example.com", full_name="Budi Santoso", phone="0822222", user_type="participant"),
        "citra": User(email="citra.SMITH@example.com", full_name="Citra Dewi", user_type="participant"),
        "dian": User(email="dian@example.com", full_name="Dian Lestari", user_type="participant"),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


@pytest.fixture
def seed_categories(db):
    categories = {
        "regular": ProgramCategory(name="Regular", description="Offline intensive program"),
        "hybrid": ProgramCategory(name="Hybrid", description="Virtual and offline mix"),
    }
    for c in categories.values():
        db.add(c)
    db.commit()
    for c in categories.values():
        db.refresh(c)
    return categories


@pytest.fixture
def seed_program(db, seed_categories):
    program = Program(
        category_id=seed_categories["regular"].id,
        name="Program Regular",
        description="Intensive preparation",
        duration="4 months",
        capacity=10,
        current_participants=0,
        status="active",
        training_cost=16000000,
        departure_cost=30000000,
        installment_plan="4_installments",
    )
    db.add(program)
    db.commit()
    db.refresh(program)
    return program


@pytest.fixture
def make_program(db, seed_categories):
    def _make(name, category="regular", status="active", capacity=10, created_at=None, **kwargs):
        program = Program(
            category_id=seed_categories[category].id if category else None,
            name=name,
            capacity=capacity,
            current_participants=kwargs.pop("current_participants", 0),
            status=status,
            **kwargs,
        )
        if created_at is not None:
            program.created_at = created_at
        db.add(program)
        db.commit()
        db.refresh(program)
        return program
    return _make


@pytest.fixture
def make_registration(db):
    """Create a registration, optionally with its selection record."""
    counter = {"value": 0}

    def _make(program, user, status="pending", code=None, selection=None, created_at=None):
        counter["value"] += 1
        registration = Registration(
            registration_code=code or f"REG-{counter['value']:04d}",
            user_id=user.id,
            program_id=program.id,
            registration_status=status,
        )
        db.add(registration)
        db.flush()
        if selection is not None:
            row = SelectionStatus(registration_id=registration.id, status=selection)
            if created_at is not None:
                row.created_at = created_at
            db.add(row)
        db.commit()
        db.refresh(registration)
        return registration
    return _make

