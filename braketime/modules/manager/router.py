# braketime/modules/manager/router.py
from fastapi import APIRouter, Depends

from braketime.config.backend import get_backend
from braketime.core.auth.dependencies import require_manager
from braketime.core.auth.session import ManagerSession
from braketime.modules.assignments.repository import AssignmentsRepository
from braketime.modules.markets.repository import MarketsRepository
from braketime.modules.stores.repository import StoresRepository
from braketime.shared.services.backend_client import BackendClient
from .service import ManagerDashboardService
from .schemas import ManagerStoresResponse

router = APIRouter()


@router.get("/stores", response_model=ManagerStoresResponse)
async def get_my_stores(
    session: ManagerSession = Depends(require_manager),
    backend: BackendClient = Depends(get_backend)
):
    """Stores assigned to the signed-in manager"""
    service = ManagerDashboardService(
        StoresRepository(backend),
        MarketsRepository(backend),
        AssignmentsRepository(backend)
    )
    stores = await service.get_assigned_stores(session.manager_id)
    plural = "" if len(stores) == 1 else "s"
    return ManagerStoresResponse(
        success=True,
        message=f"You have access to {len(stores)} store{plural}",
        username=session.username,
        manager_id=session.manager_id,
        total_stores=len(stores),
        stores=stores
    )
