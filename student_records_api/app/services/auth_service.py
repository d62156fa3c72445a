"""
Business logic for admin accounts.

Registration enforces unique usernames and emails (username checked
first, so a request colliding on both reports the username).  Login
returns ``None`` for an unknown username and for a wrong password
alike, so callers cannot tell the two apart.  Password comparison is
delegated to a ``CredentialVerifier``.
"""

import logging
import sqlite3
from typing import Optional

from ..core.db import transaction
from ..core.exceptions import DuplicateEmailError, DuplicateUsernameError
from ..core.security import CredentialVerifier, default_verifier
from ..models.admin_user import ADMIN_ROLE, AdminUser
from ..repositories.admin_user_repository import AdminUserRepository
from ..schemas.auth import AdminRead

logger = logging.getLogger(__name__)


class AuthService:
    """Registration and credential checks for administrators."""

    def __init__(
        self,
        conn: sqlite3.Connection,
        verifier: CredentialVerifier = default_verifier,
        repository: Optional[AdminUserRepository] = None,
    ):
        self.conn = conn
        self.verifier = verifier
        self.repository = repository or AdminUserRepository(conn)

    @staticmethod
    def to_view(user: AdminUser) -> AdminRead:
        return AdminRead(id=user.id, username=user.username, email=user.email, role=user.role)

    def register(self, username: str, password: str, email: str) -> AdminRead:
        logger.info("Registering admin %s", username)
        with transaction(self.conn, immediate=True):
            if self.repository.exists_by_username(username):
                logger.warning("Username already exists: %s", username)
                raise DuplicateUsernameError(username)
            if self.repository.exists_by_email(email):
                logger.warning("Admin email already exists: %s", email)
                raise DuplicateEmailError(email, resource="Admin")
            user = AdminUser(username=username, password=password, email=email, role=ADMIN_ROLE)
            try:
                self.repository.insert(user)
            except sqlite3.IntegrityError as exc:
                # Concurrent registration won the race; report which key collided.
                if "admin_users.username" in str(exc):
                    raise DuplicateUsernameError(username) from exc
                raise DuplicateEmailError(email, resource="Admin") from exc
        logger.info("Admin %s registered with ID %s", username, user.id)
        return self.to_view(user)

    def login(self, username: str, password: str) -> Optional[AdminRead]:
        """Return the admin if the credentials match, otherwise ``None``."""
        with transaction(self.conn):
            user = self.repository.find_by_username(username)
        if user is None or not self.verifier.verify(user.password, password):
            logger.info("Rejected login for %s", username)
            return None
        logger.info("Admin %s logged in", username)
        return self.to_view(user)

    def username_exists(self, username: str) -> bool:
        with transaction(self.conn):
            return self.repository.exists_by_username(username)
