# braketime/core/auth/dependencies.py
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional

from .service import AuthService
from .session import AdminSession, ManagerSession, SessionState, Unauthenticated

security = HTTPBearer(auto_error=False)

class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

class AuthorizationError(HTTPException):
    def __init__(self, detail: str = "Not enough permissions"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail
        )

async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> SessionState:
    """Session from the bearer token; Unauthenticated when there is none"""
    if credentials is None:
        return Unauthenticated()
    return AuthService.session_from_token(credentials.credentials)

async def require_session(session: SessionState = Depends(get_current_session)) -> SessionState:
    if isinstance(session, Unauthenticated):
        raise AuthenticationError("Invalid or expired token")
    return session

async def require_admin(session: SessionState = Depends(require_session)) -> AdminSession:
    if not isinstance(session, AdminSession):
        raise AuthorizationError("Admin access required")
    return session

async def require_manager(session: SessionState = Depends(require_session)) -> ManagerSession:
    if not isinstance(session, ManagerSession):
        raise AuthorizationError("Manager access required")
    return session
