from __future__ import annotations

import getpass

from catalogadmin.auth import hash_password
from catalogadmin.db import SessionLocal, init_db
from catalogadmin.models import Admin


def main() -> None:
    init_db()
    db = SessionLocal()
    try:
        username = input("Admin username: ").strip()
        if not username:
            raise ValueError("username is required")

        email = input("Admin email (optional): ").strip() or None

        password = getpass.getpass("Admin password: ").strip()
        if not password:
            raise ValueError("password is required")

        existing = db.query(Admin).filter(Admin.username == username).first()
        if existing:
            existing.password_hash = hash_password(password)
            if email:
                existing.email = email
            db.commit()
            print(f"Updated admin '{username}'.")
            return

        db.add(Admin(username=username, email=email, password_hash=hash_password(password)))
        db.commit()
        print(f"Created admin '{username}'.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
