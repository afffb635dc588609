# braketime/core/auth/service.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext
from pydantic import ValidationError

from braketime.config.settings import settings
from braketime.shared.database.models import User
from braketime.shared.services.backend_client import BackendClient
from .session import SessionState, Unauthenticated, session_adapter

logger = logging.getLogger(__name__)

# Legacy rows were stored in clear text; plaintext stays verifiable but deprecated
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "plaintext"], deprecated="auto")


class AuthService:
    """Authentication against the hosted `users` table"""

    @staticmethod
    def get_password_hash(password: str) -> str:
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, stored_password: str) -> bool:
        try:
            return pwd_context.verify(plain_password, stored_password)
        except (ValueError, TypeError) as e:
            logger.warning(f"Password verification error: {e}")
            return False

    @staticmethod
    async def login(backend: BackendClient, username: str, password: str) -> Optional[User]:
        """
        Look up the user and check the password. None means invalid
        credentials; it is also what any lookup failure returns.
        """
        try:
            rows = await backend.select(
                "users",
                columns="id,username,role,manager_id,password",
                filters={"username": username}
            )
        except Exception as e:
            logger.error(f"Login lookup failed for '{username}': {e}")
            return None

        if len(rows) != 1:
            return None

        row = rows[0]
        stored_password = row.get("password")
        # The plaintext scheme would accept "" against a missing password
        if not password or not stored_password:
            return None
        if not AuthService.verify_password(password, stored_password):
            return None
        return User.model_validate(row)

    @staticmethod
    def create_access_token(session: SessionState, expires_delta: Optional[timedelta] = None) -> str:
        """Token carrying the session variant"""
        if isinstance(session, Unauthenticated):
            raise ValueError("Cannot issue a token for an unauthenticated session")

        to_encode = session.model_dump()
        expire = datetime.now(timezone.utc) + (
            expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
        )
        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)

    @staticmethod
    def verify_token(token: str) -> Optional[dict]:
        try:
            return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        except JWTError:
            return None

    @staticmethod
    def session_from_token(token: str) -> SessionState:
        """Session carried by a token, Unauthenticated when invalid or expired"""
        payload = AuthService.verify_token(token)
        if payload is None:
            return Unauthenticated()
        payload.pop("exp", None)
        try:
            return session_adapter.validate_python(payload)
        except ValidationError:
            return Unauthenticated()
