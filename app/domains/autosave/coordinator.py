import asyncio
import logging
from dataclasses import replace
from enum import Enum
from typing import Callable, Optional, List, Set, Any

from app.core.config import settings
from app.domains.autosave.entities import DraftSnapshot, Identity
from app.domains.autosave.transport import DraftTransport

logger = logging.getLogger(__name__)


class SaveStatus(str, Enum):
    """Состояние индикатора сохранения в редакторе"""
    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"


class AutosaveCoordinator:
    """
    Координатор автосохранения черновика.

    Решает, когда отправлять текущий снимок на эндпоинт черновиков:
      - debounce после изменения (таймер перезапускается на каждое изменение);
      - heartbeat с фиксированным интервалом;
      - flush при закрытии редактора (fire-and-forget).

    Одновременно выполняется не больше одного сохранения: запрос, пришедший во
    время активного сохранения, отбрасывается без очереди и повторов. Базовая
    линия (последний успешно отправленный снимок) обновляется только при успехе,
    поэтому после ошибки тот же снимок будет отправлен следующим триггером.

    Все интервалы задаются в миллисекундах.
    """

    def __init__(
        self,
        transport: DraftTransport,
        identity: Callable[[], Optional[Identity]],
        data: Optional[DraftSnapshot] = None,
        on_save: Optional[Callable[[DraftSnapshot], Any]] = None,
        on_error: Optional[Callable[[Exception], Any]] = None,
        on_status: Optional[Callable[[SaveStatus], Any]] = None,
        interval: Optional[int] = None,
        debounce: Optional[int] = None,
        enabled: bool = True,
        error_reset: Optional[int] = None,
        saved_reset: Optional[int] = None
    ):
        self._transport = transport
        self._identity = identity
        self._data = data or DraftSnapshot()
        self._on_save = on_save
        self._on_error = on_error
        self._on_status = on_status
        self._interval = _seconds(interval, settings.autosave_interval_ms)
        self._debounce = _seconds(debounce, settings.autosave_debounce_ms)
        self._error_reset = _seconds(error_reset, settings.autosave_error_reset_ms)
        self._saved_reset = _seconds(saved_reset, settings.autosave_saved_reset_ms)
        self._enabled = enabled

        self._baseline: Optional[tuple] = None
        self._draft_id: Optional[str] = None
        self._last_record: Optional[DraftSnapshot] = None
        self._in_flight = False
        self._disposed = False
        self._status = SaveStatus.IDLE

        self._debounce_handle: Optional[asyncio.TimerHandle] = None
        self._status_handle: Optional[asyncio.TimerHandle] = None
        self._heartbeat: Optional[asyncio.Task] = None
        self._saves: Set[asyncio.Task] = set()

    async def __aenter__(self) -> "AutosaveCoordinator":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.dispose()

    @property
    def data(self) -> DraftSnapshot:
        return self._data

    @property
    def status(self) -> SaveStatus:
        return self._status

    @property
    def is_saving(self) -> bool:
        return self._in_flight

    @property
    def last_saved(self) -> Optional[str]:
        if self._last_record is not None:
            return self._last_record.last_saved
        return self._data.last_saved

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value
        if not value:
            self._cancel_debounce()

    def baseline_matches(self, snapshot: DraftSnapshot) -> bool:
        """Совпадает ли снимок с последним успешно сохранённым"""
        return snapshot.content_key() == self._baseline

    def start(self) -> None:
        """Запуск heartbeat; повторный вызов ничего не делает"""
        if self._heartbeat is None or self._heartbeat.done():
            self._heartbeat = asyncio.get_running_loop().create_task(self._heartbeat_loop())
        self.update(self._data)

    def update(self, snapshot: DraftSnapshot) -> None:
        """Новый снимок от редактора; перезапускает debounce-таймер"""
        self._data = snapshot
        if not self._should_save(snapshot):
            return

        self._cancel_debounce()
        self._debounce_handle = asyncio.get_running_loop().call_later(
            self._debounce, self._on_debounce
        )

    async def save_now(self) -> Optional[DraftSnapshot]:
        """Ручное сохранение: отменяет debounce и сразу отправляет снимок"""
        self._cancel_debounce()
        task = self._issue(self._data)
        if task is None:
            return None
        # Сохранение в полёте не отменяется вместе с вызывающим кодом
        return await asyncio.shield(task)

    def flush_on_exit(self) -> Optional[asyncio.Task]:
        """Best-effort отправка при закрытии; результат не наблюдается"""
        self._cancel_debounce()
        snapshot = self._data
        if not self._should_save(snapshot):
            return None

        # Правка после снимка в полёте при выходе теряется: второй запрос не отправляется
        if self._in_flight:
            logger.warning("Exit flush skipped: a draft save is already in flight")
            return None

        identity = self._current_identity()
        logger.info("Flushing draft on exit")
        return self._transport.send_beacon(self._with_known_id(snapshot), identity)

    async def load_draft(self, draft_id: str) -> Optional[DraftSnapshot]:
        """Загрузка черновика; он становится текущим снимком и базовой линией"""
        identity = self._current_identity()
        if identity is None:
            return None

        try:
            draft = await self._transport.load(draft_id, identity)
        except Exception as exc:
            logger.warning(f"Load draft error: {exc}")
            self._notify(self._on_error, exc)
            return None

        self._data = draft
        self._baseline = draft.content_key()
        self._draft_id = draft.id
        return draft

    async def list_drafts(self) -> List[DraftSnapshot]:
        """Список черновиков автора; пустой список при ошибке"""
        identity = self._current_identity()
        if identity is None:
            return []

        try:
            return await self._transport.list_drafts(identity)
        except Exception as exc:
            logger.warning(f"List drafts error: {exc}")
            self._notify(self._on_error, exc)
            return []

    async def dispose(self) -> None:
        """Остановка таймеров; активное сохранение дожидается завершения"""
        self._disposed = True
        self._cancel_debounce()

        if self._heartbeat is not None:
            self._heartbeat.cancel()
            try:
                await self._heartbeat
            except asyncio.CancelledError:
                pass
            self._heartbeat = None

        if self._saves:
            await asyncio.gather(*self._saves, return_exceptions=True)

        if self._status_handle is not None:
            self._status_handle.cancel()
            self._status_handle = None

    async def _heartbeat_loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            if self._should_save(self._data):
                self._issue(self._data)

    def _on_debounce(self) -> None:
        self._debounce_handle = None
        # Отправляется последний снимок, а не тот, что запустил таймер
        if self._should_save(self._data):
            self._issue(self._data)

    def _issue(self, snapshot: DraftSnapshot) -> Optional[asyncio.Task]:
        identity = self._current_identity()
        if identity is None or not snapshot.has_content():
            return None

        if self._in_flight:
            logger.debug("Draft save already in flight, request dropped")
            return None

        self._in_flight = True
        self._set_status(SaveStatus.SAVING)
        task = asyncio.get_running_loop().create_task(self._persist(snapshot, identity))
        self._saves.add(task)
        task.add_done_callback(self._saves.discard)
        return task

    async def _persist(self, snapshot: DraftSnapshot, identity: Identity) -> Optional[DraftSnapshot]:
        try:
            record = await self._transport.save(self._with_known_id(snapshot), identity)
        except Exception as exc:
            logger.warning(f"Auto-save error: {exc}")
            self._set_status(SaveStatus.ERROR, reset_after=self._error_reset)
            self._notify(self._on_error, exc)
            return None
        finally:
            self._in_flight = False

        self._baseline = snapshot.content_key()
        self._draft_id = record.id or self._draft_id
        self._last_record = record
        logger.debug(f"Draft {record.id} saved at {record.last_saved}")
        self._set_status(SaveStatus.SAVED, reset_after=self._saved_reset)
        self._notify(self._on_save, record)
        return record

    def _should_save(self, snapshot: DraftSnapshot) -> bool:
        return (
            self._enabled
            and self._current_identity() is not None
            and snapshot.has_content()
            and snapshot.content_key() != self._baseline
        )

    def _current_identity(self) -> Optional[Identity]:
        identity = self._identity()
        if identity is None or not identity.author_id:
            return None
        return identity

    def _with_known_id(self, snapshot: DraftSnapshot) -> DraftSnapshot:
        # Черновик, уже созданный этим координатором, обновляется, а не создаётся заново
        if snapshot.id or not self._draft_id:
            return snapshot
        return replace(snapshot, id=self._draft_id)

    def _cancel_debounce(self) -> None:
        if self._debounce_handle is not None:
            self._debounce_handle.cancel()
            self._debounce_handle = None

    def _set_status(self, status: SaveStatus, reset_after: Optional[float] = None) -> None:
        if self._status_handle is not None:
            self._status_handle.cancel()
            self._status_handle = None

        self._status = status
        self._notify(self._on_status, status)

        if reset_after is not None and not self._disposed:
            self._status_handle = asyncio.get_running_loop().call_later(
                reset_after, self._set_status, SaveStatus.IDLE
            )

    @staticmethod
    def _notify(callback: Optional[Callable[[Any], Any]], value: Any) -> None:
        if callback is None:
            return
        try:
            callback(value)
        except Exception:
            logger.exception("Auto-save callback failed")


def _seconds(value: Optional[int], default_ms: int) -> float:
    return (value if value is not None else default_ms) / 1000
