"""
Auth Service - admin login and account bootstrap.
"""

from typing import Optional
import logging

from app.core.errors import AuthenticationError
from app.models.user import User
from app.services.storage import BaseStore
from app.utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"

# Verified against when the username is unknown, so both failure paths
# cost exactly one scrypt run per request.
_DUMMY_HASH = hash_password("not-a-real-password")


class AuthService:
    """
    Verifies admin credentials against the store.

    Unknown usernames and wrong passwords produce the same error, and an
    unknown username still pays for one hash computation so response time
    does not reveal which accounts exist.
    """

    def __init__(self, store: BaseStore):
        self.store = store

    def login(self, username: str, password: str) -> User:
        user = self.store.get_user_by_username(username)

        if user is None:
            verify_password(password, _DUMMY_HASH)
            logger.info("Login failed: invalid credentials")
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not verify_password(password, user.password):
            logger.info("Login failed: invalid credentials")
            raise AuthenticationError(INVALID_CREDENTIALS)

        logger.info(f"Login succeeded for user {user.id}")
        return user

    def create_user(self, username: str, password: str) -> User:
        return self.store.create_user(username, hash_password(password))

    def ensure_user(self, username: str, password: str) -> Optional[User]:
        """Create the account if missing. Returns the new user, or None if it already existed."""
        if self.store.get_user_by_username(username) is not None:
            return None
        return self.create_user(username, password)

