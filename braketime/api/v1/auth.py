# braketime/api/v1/auth.py
from fastapi import APIRouter, Depends, HTTPException, status

from braketime.config.backend import get_backend
from braketime.core.auth.dependencies import get_current_session
from braketime.core.auth.schemas import SessionResponse, TokenResponse, UserLogin
from braketime.core.auth.service import AuthService
from braketime.core.auth.session import SessionState, resolve_session, select_screen
from braketime.shared.services.backend_client import BackendClient

router = APIRouter()

@router.post("/login", response_model=TokenResponse)
async def login(
    credentials: UserLogin,
    backend: BackendClient = Depends(get_backend)
):
    """
    Sign in with username and password.

    **Returns:**
    - Bearer token carrying the session
    - The session variant (admin or manager) and the screen to show
    """
    if not credentials.username.strip() or not credentials.password.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please enter username and password"
        )

    user = await AuthService.login(backend, credentials.username.strip(), credentials.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    session = resolve_session(user)
    return TokenResponse(
        access_token=AuthService.create_access_token(session),
        session=session,
        screen=select_screen(session)
    )

@router.get("/me", response_model=SessionResponse)
async def get_me(session: SessionState = Depends(get_current_session)):
    """Current session and the screen it maps to"""
    return SessionResponse(session=session, screen=select_screen(session))
