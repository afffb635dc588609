# braketime/core/auth/schemas.py
from pydantic import BaseModel, ConfigDict, Field

from .session import Screen, SessionState


class UserLogin(BaseModel):
    """Login request"""
    username: str = Field(..., description="Username")
    password: str = Field(..., description="Password")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "username": "admin",
            "password": "admin123"
        }
    })


class SessionResponse(BaseModel):
    session: SessionState
    screen: Screen


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    session: SessionState
    screen: Screen
