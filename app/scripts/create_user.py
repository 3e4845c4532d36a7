"""
Create a user, e.g. the first admin (admins cannot be created through the API).
Run from project root:
  python -m app.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user admin admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from app.core.database import SessionLocal
from app.core.errors import ValidationError
from app.services.auth import signup

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Postboard user.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (1-128 chars)")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    args = parser.parse_args(argv)

    username = args.username.strip()
    email = args.email.strip()
    if not username or len(username) > 255:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if "@" not in email:
        print("Invalid email address.", file=sys.stderr)
        return 1
    if not args.password or len(args.password) > 128:
        print("Password must be 1-128 characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        try:
            user = signup(db, username, email, args.password)
        except ValidationError as e:
            print(f"Cannot create user '{username}': {e.message}", file=sys.stderr)
            return 1
        if args.role != user.role:
            user.role = args.role
            db.commit()
        logger.info("Created user '%s' with role '%s'.", username, args.role)
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
