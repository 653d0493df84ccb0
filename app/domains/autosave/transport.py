import asyncio
import logging
from typing import Optional, List, Set, Dict, Any

import httpx

from app.core.config import settings
from app.domains.autosave.entities import DraftSnapshot, Identity

logger = logging.getLogger(__name__)

# Фоновые beacon-запросы живут здесь до завершения, чтобы задачи не собрал GC
_beacons: Set[asyncio.Task] = set()


class DraftSaveError(Exception):
    """Ошибка сохранения или загрузки черновика"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class DraftTransport:
    """HTTP клиент эндпоинта черновиков"""

    def __init__(
        self,
        endpoint_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0
    ):
        self.endpoint_url = httpx.URL(endpoint_url or settings.draft_endpoint_url)
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def save(self, snapshot: DraftSnapshot, identity: Identity) -> DraftSnapshot:
        """POST черновика; возвращает каноническую запись с lastSaved"""
        response = await self._request(
            "POST",
            self.endpoint_url,
            identity,
            "Failed to save draft",
            json=snapshot.to_payload(identity.author_id),
        )
        return DraftSnapshot.from_record(_json(response, "Failed to save draft"))

    async def load(self, draft_id: str, identity: Identity) -> DraftSnapshot:
        """Загрузка черновика по id"""
        response = await self._request(
            "GET", self.endpoint_url.join(f"draft/{draft_id}"), identity, "Failed to load draft",
        )
        return DraftSnapshot.from_record(_json(response, "Failed to load draft"))

    async def list_drafts(self, identity: Identity) -> List[DraftSnapshot]:
        """Черновики текущего автора"""
        response = await self._request(
            "GET", self.endpoint_url.join("drafts"), identity, "Failed to load drafts",
        )
        return [DraftSnapshot.from_record(record) for record in _json(response, "Failed to load drafts")]

    def send_beacon(self, snapshot: DraftSnapshot, identity: Identity) -> asyncio.Task:
        """
        Отправка черновика без ожидания ответа.

        Задача отвязана от вызывающего кода, результат никто не наблюдает.
        """
        coro = self._client.post(
            self.endpoint_url,
            json=snapshot.to_payload(identity.author_id),
            headers=self._headers(identity),
        )
        task = asyncio.get_running_loop().create_task(coro)
        _beacons.add(task)
        task.add_done_callback(_forget_beacon)
        return task

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        url: httpx.URL,
        identity: Identity,
        failure: str,
        **kwargs
    ) -> httpx.Response:
        try:
            response = await self._client.request(method, url, headers=self._headers(identity), **kwargs)
        except httpx.HTTPError as exc:
            raise DraftSaveError(f"{failure}: {exc}") from exc

        if response.is_error:
            raise DraftSaveError(_error_message(response, failure), response.status_code)

        return response

    @staticmethod
    def _headers(identity: Identity) -> Dict[str, str]:
        if identity.access_token:
            return {"Authorization": f"Bearer {identity.access_token}"}
        return {}


def _error_message(response: httpx.Response, default: str) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    detail = body.get("detail") if isinstance(body, dict) else None
    return detail if isinstance(detail, str) and detail else default


def _json(response: httpx.Response, failure: str) -> Any:
    """Тело успешного ответа; не-JSON считается ошибкой сохранения"""
    try:
        return response.json()
    except ValueError as exc:
        raise DraftSaveError(f"{failure}: invalid response body", response.status_code) from exc


def _forget_beacon(task: asyncio.Task) -> None:
    _beacons.discard(task)
    if not task.cancelled() and task.exception() is not None:
        logger.debug(f"Draft beacon failed: {task.exception()}")
