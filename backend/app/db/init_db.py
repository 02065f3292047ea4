"""
Database initialization script.

Usage:
    python -m app.db.init_db
    python -m app.db.init_db --admin <username> <email> <password>
"""
import sys
from app.db.session import SessionLocal, init_db
from app.models import User, UserRole
from app.core.security import get_password_hash


def create_admin(username: str, email: str, password: str):
    """Create the first admin account if the username is free."""
    db = SessionLocal()
    try:
        if db.query(User).filter(User.username == username).first():
            print(f"User '{username}' already exists, skipping")
            return
        db.add(User(
            username=username,
            email=email,
            hashed_password=get_password_hash(password),
            role=UserRole.ADMIN,
        ))
        db.commit()
        print(f"Admin '{username}' created")
    finally:
        db.close()


if __name__ == "__main__":
    print("Initializing database...")
    init_db()
    print("Database initialized successfully!")
    if len(sys.argv) == 5 and sys.argv[1] == "--admin":
        create_admin(sys.argv[2], sys.argv[3], sys.argv[4])
