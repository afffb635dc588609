# braketime/shared/services/backend_client.py
import httpx
import logging
from typing import Any, Dict, List, Optional, Tuple

from braketime.config.settings import settings

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """Error reported by the hosted backend or by the transport"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        details: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details


def encode_filter(value: Any) -> str:
    """Encode a filter value with PostgREST operators"""
    if value is None:
        return "is.null"
    if isinstance(value, bool):
        return f"is.{str(value).lower()}"
    if isinstance(value, (list, tuple, set)):
        return "in.(" + ",".join(str(v) for v in value) + ")"
    return f"eq.{value}"


class BackendClient:
    """Client for the hosted backend tables (PostgREST dialect)"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url or settings.rest_url
        self.api_key = api_key if api_key is not None else settings.supabase_anon_key
        self.timeout = timeout or settings.backend_timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._get_headers(),
            timeout=self.timeout,
            transport=transport
        )

    def _get_headers(self) -> Dict[str, str]:
        """Authentication headers"""
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    @staticmethod
    def _build_params(
        filters: Optional[Dict[str, Any]] = None,
        columns: Optional[str] = None
    ) -> List[Tuple[str, str]]:
        params = []
        if columns:
            params.append(("select", columns))
        for column, value in (filters or {}).items():
            params.append((column, encode_filter(value)))
        return params

    async def _request(
        self,
        method: str,
        table: str,
        params: Optional[List[Tuple[str, str]]] = None,
        json: Any = None,
        prefer: Optional[str] = None
    ) -> Any:
        headers = {"Prefer": prefer} if prefer else None
        try:
            response = await self._client.request(
                method,
                f"/{table}",
                params=params,
                json=json,
                headers=headers
            )
        except httpx.TimeoutException:
            logger.error(f"Timeout on {method} {table}")
            raise BackendError(f"Request to '{table}' timed out")
        except httpx.HTTPError as e:
            logger.error(f"Transport error on {method} {table}: {e}")
            raise BackendError(f"Could not reach backend: {e}")

        if response.status_code >= 400:
            raise self._error_from_response(response)

        if not response.content:
            return None
        return response.json()

    @staticmethod
    def _error_from_response(response: httpx.Response) -> BackendError:
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            return BackendError(
                body.get("message") or f"Backend error {response.status_code}",
                status_code=response.status_code,
                code=body.get("code"),
                details=body.get("details")
            )
        return BackendError(
            response.text or f"Backend error {response.status_code}",
            status_code=response.status_code
        )

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """Read rows from a table"""
        data = await self._request("GET", table, params=self._build_params(filters, columns))
        return data or []

    async def insert(self, table: str, row: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Insert one row and return it as stored"""
        data = await self._request(
            "POST",
            table,
            params=self._build_params(columns="*"),
            json=[row],
            prefer="return=representation"
        )
        return data[0] if data else None

    async def update(
        self,
        table: str,
        values: Dict[str, Any],
        filters: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Update rows; returns the first updated row or None"""
        data = await self._request(
            "PATCH",
            table,
            params=self._build_params(filters, "*"),
            json=values,
            prefer="return=representation"
        )
        return data[0] if data else None

    async def delete(self, table: str, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Delete rows; returns the deleted rows"""
        if not filters:
            raise BackendError(f"Refusing to delete from '{table}' without filters")
        data = await self._request(
            "DELETE",
            table,
            params=self._build_params(filters, "*"),
            prefer="return=representation"
        )
        return data or []

    async def health_check(self) -> bool:
        """Check that the backend answers"""
        try:
            response = await self._client.get("/")
            return response.status_code < 500
        except httpx.HTTPError:
            return False

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "BackendClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
