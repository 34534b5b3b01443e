"""
Ready to Work Database Seeder

Creates the plan catalogue plus demo accounts:
- An admin user
- A verified candidate (Ahmed Khan) with a few notifications
- A verified employer (Gulf Builders) on the Skilled plan
"""

import sys
sys.path.insert(0, ".")

from datetime import date

from readytowork.db.session import SessionLocal, engine
from readytowork.db.base import Base
from readytowork.models import User, Candidate, Employer, Plan
from readytowork.core.security import get_password_hash
from readytowork.services.billing import seed_plans
from readytowork.services.notifications import create_notification

DEMO_PASSWORD = "Password123!"


def seed_database():
    """Seed the database with demo data."""

    # Create all tables
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        created_plans = seed_plans(db)
        print(f"Plans: {created_plans} created")

        # Check if already seeded
        existing_admin = db.query(User).filter(User.email == "admin@readytowork.sa").first()
        if existing_admin:
            print("Demo accounts already seeded. Skipping...")
            return

        print("Seeding demo accounts...")

        # 1. Admin user
        admin = User(
            email="admin@readytowork.sa",
            hashed_password=get_password_hash(DEMO_PASSWORD),
            role="admin",
            email_verified=True,
        )
        db.add(admin)

        # 2. Candidate
        ahmed = Candidate(
            email="ahmed.khan@example.com",
            hashed_password=get_password_hash(DEMO_PASSWORD),
            first_name="Ahmed",
            last_name="Khan",
            phone="+966501234567",
            whatsapp="+966501234567",
            gender="male",
            dob=date(1992, 3, 14),
            nationality="Pakistan",
            languages="English, Urdu, Arabic",
            job_title="Electrician",
            experience_years=8,
            saudi_experience=3,
            availability_date=date(2025, 1, 1),
            location="Riyadh",
            visa_status="active",
            visa_expiry=date(2026, 6, 30),
            education=[{"degree": "Diploma in Electrical Technology", "institution": "GCT Lahore", "year": 2012}],
            preferred_benefits=["accommodation", "transportation"],
            terms_accepted=True,
            email_verified=True,
        )
        db.add(ahmed)

        # 3. Employer on the Skilled plan
        skilled = db.query(Plan).filter(Plan.slug == "skilled").first()
        employer = Employer(
            email="hr@gulfbuilders.example.com",
            hashed_password=get_password_hash(DEMO_PASSWORD),
            responsible_person="Fatimah Al-Harbi",
            company_name="Gulf Builders",
            industry="Construction",
            company_size="51-200",
            terms_accepted=True,
            email_verified=True,
            interview_credits=skilled.interview_credits_granted,
            contact_unlock_credits=skilled.contact_unlock_credits_granted,
            active_plan_id=skilled.id,
            basic_filters=skilled.basic_filters,
            nationality_restriction=skilled.nationality_restriction,
        )
        db.add(employer)
        db.flush()  # Get IDs

        # 4. Notifications
        create_notification(
            db,
            ahmed,
            type="interview_scheduled",
            title="Interview scheduled",
            message="Gulf Builders scheduled an interview with you for Electrician.",
            action_url="/dashboard/interviews",
        )
        create_notification(
            db,
            ahmed,
            type="system",
            title="Complete your profile",
            message="Add a profile picture and resume to stand out to employers.",
            action_url="/dashboard/settings",
        )
        create_notification(
            db,
            employer,
            type="credit_low",
            title="Credits running low",
            message="You have 1 contact unlock credit left.",
            action_url="/pricing",
        )

        # Commit all changes
        db.commit()

        print("✅ Database seeded successfully!")
        print("\n📋 Created accounts (password: Password123!):")
        print("   - admin@readytowork.sa [users, admin]")
        print("   - ahmed.khan@example.com [candidates]")
        print("   - hr@gulfbuilders.example.com [employers, Skilled plan]")

    except Exception as e:
        db.rollback()
        print(f"❌ Error seeding database: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
