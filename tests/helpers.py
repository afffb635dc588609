from braketime.modules.admin.service import AdminDataService
from braketime.modules.assignments.repository import AssignmentsRepository
from braketime.modules.managers.repository import ManagersRepository
from braketime.modules.markets.repository import MarketsRepository
from braketime.modules.stores.repository import StoresRepository


def build_service(backend, notifier, mode="column"):
    return AdminDataService(
        MarketsRepository(backend),
        ManagersRepository(backend),
        StoresRepository(backend),
        AssignmentsRepository(backend),
        notifier,
        store_manager_mode=mode
    )


def toast_messages(notifier):
    return [toast.message for toast in notifier.toasts]


def toast_severities(notifier):
    return [toast.severity.value for toast in notifier.toasts]
