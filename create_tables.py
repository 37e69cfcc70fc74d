# create_tables.py
import argparse

from task_portal.database import Base, SessionLocal, engine
from task_portal.models import User, Task  # noqa: F401  (registers tables)
from task_portal.services.credentials import CredentialStore


def create_tables(drop: bool = False):
    """Create all tables, optionally dropping the existing ones first"""
    try:
        if drop:
            Base.metadata.drop_all(bind=engine)
            print("🗑️  Existing tables dropped")

        Base.metadata.create_all(bind=engine)
        print("✅ All tables created successfully!")

        create_default_admin()

    except Exception as e:
        print(f"❌ Error creating tables: {e}")
        raise


def create_default_admin():
    """Create a default admin user"""
    db = SessionLocal()
    try:
        admin = CredentialStore(db).ensure_default_admin()
        if admin:
            print("✅ Default admin user created!")
            print(f"   Username: {admin.username}")
        else:
            print("ℹ️  Admin user already exists")
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the task portal tables")
    parser.add_argument("--drop", action="store_true", help="drop existing tables first")
    args = parser.parse_args()
    create_tables(drop=args.drop)
