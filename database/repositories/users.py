"""
User Repository - Account storage and lookup
"""

from typing import Optional

from config import get_logger
from database.models import Role, User, to_db_timestamp
from database.repositories.base import BaseRepository
from exceptions import ConflictError, DataIntegrityError

logger = get_logger(__name__).bind(component="database")


class UserRepository(BaseRepository):
    """Repository for user accounts"""

    def create_user(self, user: User) -> User:
        """Insert a new user

        Raises:
            ConflictError: If the username or email is already registered
        """
        user.email = user.email.lower()
        try:
            self._execute(
                """
                INSERT INTO users (id, username, email, password_hash, first_name,
                                   last_name, role, is_verified, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    user.id,
                    user.username,
                    user.email,
                    user.password_hash,
                    user.first_name,
                    user.last_name,
                    user.role.value,
                    user.is_verified,
                    to_db_timestamp(user.created_at),
                ),
            )
        except DataIntegrityError as e:
            raise ConflictError(
                "Username or email already registered",
                context={"username": user.username},
            ) from e

        logger.info("created user", user_id=user.id, role=user.role.value)
        return user

    def get_user(self, user_id: str) -> Optional[User]:
        row = self._fetch_one("SELECT * FROM users WHERE id = ?", (user_id,))
        return User.from_db_row(row) if row else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        row = self._fetch_one("SELECT * FROM users WHERE username = ?", (username,))
        return User.from_db_row(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        row = self._fetch_one("SELECT * FROM users WHERE email = ?", (email.lower(),))
        return User.from_db_row(row) if row else None

    def set_role(self, user_id: str, role: Role) -> Optional[User]:
        """Change a user's role. Returns the updated user or None if missing."""
        self._execute("UPDATE users SET role = ? WHERE id = ?", (role.value, user_id))
        return self.get_user(user_id)

    def get_user_count(self) -> int:
        return self._count("SELECT COUNT(*) FROM users")
