#!/usr/bin/env python3
"""
Create User Script

Manually create an account (admin utility). The first administrator has to
be created this way, since self-registration only ever produces students.

Usage:
    python3 -m userland.scripts.create_user --username admin --email admin@example.edu \
        --first-name Ada --last-name Admin --role admin
"""

import argparse
import getpass
import sys
from typing import Optional, Sequence

from config import get_logger
from database.db import ElectionDatabase
from database.models import Role, User
from database.repositories.base import new_id
from exceptions import ConflictError
from userland.auth.passwords import hash_password

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a new user account")
    parser.add_argument('--username', required=True, help="Login name")
    parser.add_argument('--email', required=True, help="User email address")
    parser.add_argument('--first-name', required=True)
    parser.add_argument('--last-name', required=True)
    parser.add_argument('--role', choices=[r.value for r in Role], default=Role.ADMIN.value)
    parser.add_argument('--password', help="Prompted for when omitted")
    parser.add_argument('--db-path', help="Database file (defaults to SECUREVOTE_DB_PATH)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    password = args.password or getpass.getpass("Password: ")
    if len(password) < 8:
        logger.error("password must be at least 8 characters")
        return 1

    logger.info("creating new user account", username=args.username, role=args.role)

    db = ElectionDatabase(db_path=args.db_path)
    try:
        user = User(
            id=new_id(),
            username=args.username,
            email=args.email,
            password_hash=hash_password(password),
            first_name=args.first_name,
            last_name=args.last_name,
            role=Role(args.role),
            is_verified=True,
        )
        try:
            db.users.create_user(user)
        except ConflictError:
            logger.error("user already exists", username=args.username, email=args.email)
            return 1

        logger.info("user account created successfully", user_id=user.id)
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
