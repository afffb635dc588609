# braketime/config/backend.py
from fastapi import Request

from braketime.shared.services.backend_client import BackendClient


def create_backend() -> BackendClient:
    """Shared backend client, opened once per application"""
    return BackendClient()


# Backend dependency
def get_backend(request: Request) -> BackendClient:
    """Backend client for FastAPI endpoints"""
    return request.app.state.backend
