"""
Create a user (e.g. the first admin). Run from project root:
  python -m storefront.scripts.create_user EMAIL PASSWORD [role]
Example:
  python -m storefront.scripts.create_user admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from storefront.core.config import get_settings
from storefront.core.database import SessionLocal
from storefront.core.errors import DuplicateEmailError
from storefront.core.logging import configure_logging
from storefront.core.security import PasswordHasher, TokenIssuer
from storefront.schemas.auth import Role, normalize_email
from storefront.services.auth import AuthService
from storefront.services.users import SqlUserStore

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Storefront user.")
    parser.add_argument("email", help="Login email (1-255 chars)")
    parser.add_argument("password", help="Password (1-128 chars)")
    parser.add_argument(
        "role", nargs="?", default=Role.USER.value, choices=[r.value for r in Role]
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    try:
        email = normalize_email(args.email)
    except ValidationError:
        print("Invalid email.", file=sys.stderr)
        return 1
    if not args.password or len(args.password) > 128:
        print("Password must be 1-128 characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        auth = AuthService(
            SqlUserStore(db),
            PasswordHasher.from_settings(settings),
            TokenIssuer.from_settings(settings),
        )
        user = auth.register(email, args.password, Role(args.role))
    except DuplicateEmailError:
        print(f"User '{email}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()

    print(f"Created user '{user.email}' (id={user.id}) with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
