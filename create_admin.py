"""Bootstrap an admin account. Registration only ever creates regular users."""
import argparse

from database import Base, SessionLocal, engine
from models import RoleEnum
from user_directory import UserDirectory


def create_admin(username: str, email: str, password: str):
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        users = UserDirectory(db)
        existing = users.get_by_email(email)
        if existing:
            print(f"User '{email}' already exists with role {existing.role.value}")
            return existing

        admin = users.create_user(username, email, password, role=RoleEnum.admin)
        print(f"Admin created successfully: {admin.username} / {admin.email} (id {admin.id})")
        return admin
    finally:
        db.close()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create an admin account")
    parser.add_argument("--username", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    args = parser.parse_args(argv)
    create_admin(args.username, args.email, args.password)


if __name__ == "__main__":
    main()
