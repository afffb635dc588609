# braketime/modules/admin/router.py
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from typing import Any, Awaitable, Callable
import logging

from braketime.config.backend import get_backend
from braketime.core.auth.dependencies import require_admin
from braketime.core.auth.session import AdminSession
from braketime.core.notifications import ConfirmOptions, RequestNotificationSink, ToastSeverity
from braketime.modules.assignments.repository import AssignmentsRepository
from braketime.modules.managers.repository import ManagersRepository
from braketime.modules.markets.repository import MarketsRepository
from braketime.modules.stores.repository import StoresRepository
from braketime.shared.services.backend_client import BackendClient
from .service import AdminDataService
from .schemas import (
    AdminActionResponse,
    AdminDashboardResponse,
    ConfirmationRequiredResponse,
    ManagerCreate,
    ManagerUpdate,
    MarketCreate,
    MarketUpdate,
    StoreCreate,
    StoreUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_notifier(
    confirm: bool = Query(False, description="Confirm a destructive action")
) -> RequestNotificationSink:
    return RequestNotificationSink(confirmed=confirm)


def get_admin_service(
    backend: BackendClient = Depends(get_backend),
    notifier: RequestNotificationSink = Depends(get_notifier)
) -> AdminDataService:
    return AdminDataService(
        MarketsRepository(backend),
        ManagersRepository(backend),
        StoresRepository(backend),
        AssignmentsRepository(backend),
        notifier
    )


def _action_response(
    ok: bool,
    notifier: RequestNotificationSink,
    failure_status: int = status.HTTP_400_BAD_REQUEST
) -> JSONResponse:
    body = AdminActionResponse(
        success=ok,
        message=notifier.last_message_for(ToastSeverity.SUCCESS if ok else ToastSeverity.ERROR),
        notifications=notifier.toasts
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if ok else failure_status,
        content=body.model_dump(mode="json")
    )


async def _confirmed_delete(
    notifier: RequestNotificationSink,
    title: str,
    label: str,
    action: Callable[[], Awaitable[Any]]
) -> JSONResponse:
    """Run a delete only behind an accepted confirmation"""
    notifier.show_confirm(ConfirmOptions(
        title=title,
        message=f"Are you sure you want to delete {label}?",
        confirm_text="Delete",
        cancel_text="Cancel",
        is_dangerous=True,
        on_confirm=action
    ))
    result = await notifier.settle()
    if result is None:
        body = ConfirmationRequiredResponse(
            message="Confirmation required",
            confirmation=notifier.pending_confirmation
        )
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=body.model_dump(mode="json"))
    return _action_response(bool(result), notifier)


# ==================== DASHBOARD ====================

@router.get("/dashboard", response_model=AdminDashboardResponse)
async def get_dashboard(
    session: AdminSession = Depends(require_admin),
    service: AdminDataService = Depends(get_admin_service),
    notifier: RequestNotificationSink = Depends(get_notifier)
):
    """
    Markets, managers and stores with their derived labels and counts.
    """
    ok = await service.load_all()
    body = AdminDashboardResponse(
        success=ok,
        message=service.error or "",
        dashboard=service.dashboard(),
        notifications=notifier.toasts
    )
    if not ok:
        return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content=body.model_dump(mode="json"))
    return body


# ==================== MARKETS ====================

@router.post("/markets", response_model=AdminActionResponse)
async def create_market(
    market: MarketCreate,
    session: AdminSession = Depends(require_admin),
    service: AdminDataService = Depends(get_admin_service),
    notifier: RequestNotificationSink = Depends(get_notifier)
):
    return _action_response(await service.add_market(market.name), notifier)


@router.put("/markets/{market_id}", response_model=AdminActionResponse)
async def update_market(
    market_id: int,
    market: MarketUpdate,
    session: AdminSession = Depends(require_admin),
    service: AdminDataService = Depends(get_admin_service),
    notifier: RequestNotificationSink = Depends(get_notifier)
):
    return _action_response(await service.edit_market(market_id, market.name), notifier)


@router.delete("/markets/{market_id}", response_model=AdminActionResponse)
async def delete_market(
    market_id: int,
    session: AdminSession = Depends(require_admin),
    service: AdminDataService = Depends(get_admin_service),
    notifier: RequestNotificationSink = Depends(get_notifier)
):
    """
    Delete a market. Its stores and managers are kept and show up as
    unassigned. Requires `?confirm=true`.
    """
    return await _confirmed_delete(
        notifier, "Delete Market", f"market #{market_id}",
        lambda: service.delete_market(market_id)
    )


# ==================== MANAGERS ====================

@router.post("/managers", response_model=AdminActionResponse)
async def create_manager(
    manager: ManagerCreate,
    session: AdminSession = Depends(require_admin),
    service: AdminDataService = Depends(get_admin_service),
    notifier: RequestNotificationSink = Depends(get_notifier)
):
    ok = await service.add_manager(manager.name, manager.email, manager.password, manager.market_id)
    return _action_response(ok, notifier)


@router.put("/managers/{manager_id}", response_model=AdminActionResponse)
async def update_manager(
    manager_id: int,
    manager: ManagerUpdate,
    session: AdminSession = Depends(require_admin),
    service: AdminDataService = Depends(get_admin_service),
    notifier: RequestNotificationSink = Depends(get_notifier)
):
    """Update a manager; omit `password` to keep the current one."""
    ok = await service.edit_manager(
        manager_id, manager.name, manager.email, manager.password, manager.market_id
    )
    return _action_response(ok, notifier)


@router.delete("/managers/{manager_id}", response_model=AdminActionResponse)
async def delete_manager(
    manager_id: int,
    session: AdminSession = Depends(require_admin),
    service: AdminDataService = Depends(get_admin_service),
    notifier: RequestNotificationSink = Depends(get_notifier)
):
    return await _confirmed_delete(
        notifier, "Delete Manager", f"manager #{manager_id}",
        lambda: service.delete_manager(manager_id)
    )


# ==================== STORES ====================

@router.post("/stores", response_model=AdminActionResponse)
async def create_store(
    store: StoreCreate,
    session: AdminSession = Depends(require_admin),
    service: AdminDataService = Depends(get_admin_service),
    notifier: RequestNotificationSink = Depends(get_notifier)
):
    """
    Create a store. `store_id` is optional manual numbering and must not
    already be taken.
    """
    if store.store_id is not None:
        # Needed to reject an id that is already taken
        if not await service.load_all():
            return _action_response(False, notifier, status.HTTP_502_BAD_GATEWAY)
    ok = await service.add_store(store.store_name, store.market_id, store.store_id, store.manager_id)
    return _action_response(ok, notifier)


@router.put("/stores/{store_id}", response_model=AdminActionResponse)
async def update_store(
    store_id: int,
    store: StoreUpdate,
    session: AdminSession = Depends(require_admin),
    service: AdminDataService = Depends(get_admin_service),
    notifier: RequestNotificationSink = Depends(get_notifier)
):
    ok = await service.edit_store(store_id, store.store_name, store.market_id, store.manager_id)
    return _action_response(ok, notifier)


@router.delete("/stores/{store_id}", response_model=AdminActionResponse)
async def delete_store(
    store_id: int,
    session: AdminSession = Depends(require_admin),
    service: AdminDataService = Depends(get_admin_service),
    notifier: RequestNotificationSink = Depends(get_notifier)
):
    """Delete a store after removing its manager assignments."""
    return await _confirmed_delete(
        notifier, "Delete Store", f"store #{store_id}",
        lambda: service.delete_store(store_id)
    )


@router.get("/health")
async def admin_health():
    return {
        "service": "admin",
        "status": "healthy",
        "features": [
            "Markets",
            "Market managers",
            "Stores",
            "Manager-store assignments"
        ]
    }
