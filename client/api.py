import httpx
from typing import Any, Dict, List, Optional
from settings import logger


class ApiError(Exception):
    """Failed request against the Kanban Board API."""

    def __init__(self, kind: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code


class BoardApiClient:
    """Async client for the board and task endpoints."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.transport = transport
        self.timeout = timeout

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, transport=self.transport, timeout=self.timeout
            ) as client:
                response = await client.request(method, f"/api{path}", **kwargs)
                response.raise_for_status()
                return response.json()

        except httpx.HTTPStatusError as e:
            kind = "http_error"
            message = f"HTTP {e.response.status_code}"
            try:
                body = e.response.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                kind = body.get("kind", kind)
                message = body.get("error") or body.get("detail") or message

            logger.warning("Kanban API request rejected", extra={
                "method": method,
                "path": path,
                "status_code": e.response.status_code,
                "kind": kind
            })
            raise ApiError(kind, str(message), e.response.status_code) from e

        except httpx.RequestError as e:
            logger.error("Kanban API request failed", extra={
                "method": method,
                "path": path,
                "error": str(e)
            })
            raise ApiError("unavailable", f"Request error: {e}") from e

    async def list_boards(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/boards")

    async def get_board(self, board_id: str) -> Dict[str, Any]:
        """Board with its tasks."""
        return await self._request("GET", f"/boards/{board_id}")

    async def create_board(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/boards", json=fields)

    async def delete_board(self, board_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/boards/{board_id}")

    async def list_tasks(self, board_id: str) -> List[Dict[str, Any]]:
        return await self._request("GET", "/tasks", params={"board_id": board_id})

    async def get_task(self, task_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/tasks/{task_id}")

    async def create_task(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/tasks", json=fields)

    async def update_task(self, task_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        """Send only the keys in `patch`; None values clear fields server-side."""
        return await self._request("PATCH", f"/tasks/{task_id}", json=patch)

    async def delete_task(self, task_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/tasks/{task_id}")
