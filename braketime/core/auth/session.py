# braketime/core/auth/session.py
"""
Session variants and screen selection.

A login result is turned into exactly one variant when the user signs in;
everything downstream dispatches on the variant instead of re-reading the
role string.
"""
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

from braketime.shared.database.models import User


class Unauthenticated(BaseModel):
    kind: Literal["unauthenticated"] = "unauthenticated"


class AdminSession(BaseModel):
    kind: Literal["admin"] = "admin"
    user_id: int
    username: str


class ManagerSession(BaseModel):
    kind: Literal["manager"] = "manager"
    user_id: int
    username: str
    manager_id: Optional[int] = None


SessionState = Annotated[
    Union[Unauthenticated, AdminSession, ManagerSession],
    Field(discriminator="kind")
]

session_adapter = TypeAdapter(SessionState)


class Screen(str, Enum):
    LOADING = "loading"
    LOGIN = "login"
    ADMIN_DASHBOARD = "admin_dashboard"
    MANAGER_DASHBOARD = "manager_dashboard"


def resolve_session(user: Optional[User]) -> SessionState:
    """Map a login result to its session variant"""
    if user is None:
        return Unauthenticated()
    if user.is_admin:
        return AdminSession(user_id=user.id, username=user.username)
    return ManagerSession(user_id=user.id, username=user.username, manager_id=user.manager_id)


def select_screen(session: SessionState, loading: bool = False) -> Screen:
    if loading:
        return Screen.LOADING
    if isinstance(session, AdminSession):
        return Screen.ADMIN_DASHBOARD
    if isinstance(session, ManagerSession):
        return Screen.MANAGER_DASHBOARD
    return Screen.LOGIN
