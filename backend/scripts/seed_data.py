"""Seed the database with sample programs, applicants and selection records."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import datetime
from intern_admin.database import SessionLocal, engine, Base
import intern_admin.models  # noqa: F401

from intern_admin.models.program import Program, ProgramCategory
from intern_admin.models.registration import Registration
from intern_admin.models.selection import SelectionStatus
from intern_admin.models.user import User
from intern_admin.services import participant_service

CONTACT_INFO = "Email: info@example.com\nPhone: 0811 0000 0000"


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(User).count() > 0:
            print("Database already seeded. Skipping.")
            return

        # Users
        users = [
            User(email="admin@example.com", full_name="Administrator", user_type="admin"),
            User(email="user1@example.com", full_name="Participant One", phone="08882124339",
                 address="Jl. Contoh No. 123", user_type="participant"),
            User(email="user2@example.com", full_name="Participant Two", phone="083821612483",
                 address="Jl. Demo No. 456", user_type="participant"),
        ]
        db.add_all(users)
        db.flush()

        # Program categories
        categories = [
            ProgramCategory(name="Regular", description="Intensive offline preparation program"),
            ProgramCategory(name="Hybrid", description="Flexible mix of virtual and in-person learning"),
            ProgramCategory(name="Fast Track", description="Accelerated track for certified applicants"),
        ]
        db.add_all(categories)
        db.flush()

        # Programs
        programs = [
            Program(category_id=categories[0].id, name="Program Regular",
                    description="Intensive and comprehensive preparation.",
                    schedule="Mon-Fri, 09:00-17:00", duration="4 months", capacity=20,
                    status="active", location="Depok dormitory", contact_info=CONTACT_INFO,
                    training_cost=16000000, departure_cost=30000000,
                    installment_plan="4_installments",
                    bridge_fund="Available (guaranteed by the sending company)",
                    timeline_text="Month 1: Basic language\nMonth 2: Vocabulary and grammar\n"
                                  "Month 3: Work culture\nMonth 4: Final evaluation",
                    requirements_text="Aged 18 to 30.\nHigh school diploma or equivalent."),
            Program(category_id=categories[1].id, name="Program Hybrid",
                    description="Virtual training followed by an in-person consolidation month.",
                    schedule="Mon-Fri, 09:00-17:00", duration="6 months", capacity=15,
                    status="active", location="-", contact_info=CONTACT_INFO,
                    training_cost=7150000, departure_cost=30000000,
                    installment_plan="6_installments",
                    requirements_text="Aged 18 to 30.\nHigh school diploma or equivalent."),
            Program(category_id=categories[2].id, name="Program Fast Track",
                    description="Fast track for applicants who already hold a language certificate.",
                    schedule="Mon-Fri, 09:00-17:00", duration="1 month", capacity=12,
                    status="active", location="Jakarta", contact_info=CONTACT_INFO,
                    training_cost=4000000, departure_cost=30000000,
                    installment_plan="none",
                    requirements_text="Language certificate required.\nAged 18 to 30."),
        ]
        db.add_all(programs)
        db.flush()

        # Registrations with their selection records
        registrations = [
            Registration(registration_code="REG-2026-0001", user_id=users[1].id,
                         program_id=programs[0].id, registration_status="passed"),
            Registration(registration_code="REG-2026-0002", user_id=users[2].id,
                         program_id=programs[0].id, registration_status="pending"),
            Registration(registration_code="REG-2026-0003", user_id=users[2].id,
                         program_id=programs[1].id, registration_status="failed"),
        ]
        db.add_all(registrations)
        db.flush()

        selections = [
            SelectionStatus(registration_id=registrations[0].id, status="passed",
                            notes="Interview passed", evaluated_by=users[0].id,
                            evaluated_at=datetime(2026, 1, 15, 10, 0)),
            SelectionStatus(registration_id=registrations[1].id, status="pending"),
            SelectionStatus(registration_id=registrations[2].id, status="failed",
                            notes="Incomplete documents", evaluated_by=users[0].id,
                            evaluated_at=datetime(2026, 1, 16, 14, 30)),
        ]
        db.add_all(selections)
        db.commit()

        # Derive current_participants from the passed registrations just inserted.
        synced = participant_service.reconcile_all(db)

        print("Seed data inserted successfully.")
        print(f"  Users: {len(users)}")
        print(f"  Categories: {len(categories)}")
        print(f"  Programs: {len(programs)} (participant counts synced: {synced})")
        print(f"  Registrations: {len(registrations)}")
        print(f"  Selection records: {len(selections)}")

    except Exception as e:
        db.rollback()
        raise e
    finally:
        db.close()


if __name__ == "__main__":
    seed()
