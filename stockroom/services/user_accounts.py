"""
User Accounts service for sign-up, login and sessions.
"""
import logging
from typing import Dict, Any, Optional
from sqlalchemy.orm import Session
from werkzeug.security import generate_password_hash, check_password_hash

from stockroom.core.config import settings
from stockroom.core.exceptions import AuthenticationError, ConflictError
from stockroom.core.redis_client import session_manager
from stockroom.models.users import User

logger = logging.getLogger(__name__)


def serialize_user(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
    }


class UserAccounts:
    """Service for dashboard users and their Redis-backed sessions."""

    def __init__(self):
        self.sessions = session_manager

    async def signup(
        self,
        db: Session,
        email: Optional[str],
        password: Optional[str],
        name: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Create a user account.

        The name defaults to the local part of the email address.
        """
        email = (email or "").strip().lower()
        if not email or not password:
            raise ValueError("Email and password are required")
        if len(password) < settings.min_password_length:
            raise ValueError(f"Password must be at least {settings.min_password_length} characters")

        if db.query(User).filter(User.email == email).first():
            raise ConflictError("User already exists")

        user = User(
            email=email,
            password_hash=generate_password_hash(password),
            name=(name or "").strip() or email.split("@")[0],
        )
        db.add(user)
        db.commit()
        db.refresh(user)

        logger.info(f"User signed up: {user.id}")
        return serialize_user(user)

    def authenticate(self, db: Session, email: Optional[str], password: Optional[str]) -> User:
        email = (email or "").strip().lower()
        user = db.query(User).filter(User.email == email).first() if email else None
        if not user or not password or not check_password_hash(user.password_hash, password):
            raise AuthenticationError("Invalid email or password")
        return user

    async def login(self, db: Session, email: Optional[str], password: Optional[str]) -> Dict[str, Any]:
        """Check credentials and open a session. Returns the session id and the user."""
        user = self.authenticate(db, email, password)
        session_id = self.sessions.create_session(user.id, {"email": user.email, "name": user.name})
        logger.info(f"User logged in: {user.id}")
        return {"session_id": session_id, "user": serialize_user(user)}

    async def logout(self, session_id: Optional[str]) -> bool:
        if not session_id:
            return False
        return self.sessions.delete_session(session_id)

    async def get_session(self, session_id: Optional[str]) -> Optional[Dict[str, Any]]:
        if not session_id:
            return None
        return self.sessions.get_session(session_id)
