"""
Seed script for local development.
Run: python seed.py
Safe to re-run: collections that already exist are left untouched.
"""
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from qc_tool import create_app
from qc_tool.constants import KEY_USERS, KEY_RECORDS, KEY_PRODUCTION
from qc_tool.extensions import db
from qc_tool.repository import SQLAlchemyRepository
from qc_tool.services.store import Store

app = create_app()


def seed():
    with app.app_context():
        print("Seeding QC store...")

        try:
            db.session.execute(db.text("SELECT 1"))
            print("✓ Database connected")
        except Exception as e:
            print(f"✗ Database connection failed: {e}")
            print("  Make sure PostgreSQL is running and the database exists.")
            print("  Run: createdb qc_tool")
            sys.exit(1)

        db.create_all()
        print("✓ Tables qc_kv_store and qc_audit_log ready")

        repo = SQLAlchemyRepository()
        store = Store(repo)
        had_users = repo.get(KEY_USERS) is not None
        users = store.get_users()  # first read writes the initial roster
        for key in (KEY_RECORDS, KEY_PRODUCTION):
            if repo.get(key) is None:
                repo.set(key, [])
        db.session.commit()

        print(f"✓ {len(users)} users ({'existing' if had_users else 'initial roster'})")
        print(f"✓ {len(store.get_records())} QC records, {len(store.get_production_records())} production entries")
        admin = next((u for u in users if u['role'] == 'ADMIN'), None)
        print()
        print("Test with:")
        print('  curl http://localhost:5000/api/v1/health')
        if admin:
            print(f'  curl -H "Authorization: Bearer {app.config["API_SECRET_TOKEN"]}" -H "X-User-Id: {admin["id"]}" \\')
            print('       http://localhost:5000/api/v1/lookups/qc-errors')


if __name__ == '__main__':
    seed()
