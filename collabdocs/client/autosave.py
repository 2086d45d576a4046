import asyncio
import logging
from typing import Awaitable, Callable, Optional

from collabdocs.client.api import ApiError

logger = logging.getLogger(__name__)

AUTOSAVE_DELAY = 2.0


class Autosave:
    """Отложенное сохранение: каждое изменение перезапускает таймер.

    Сохраняется только последнее состояние после паузы в ``delay`` секунд.
    Ошибка сохранения логируется и остается в ``last_error``; повторных
    попыток нет.
    """

    def __init__(self, save: Callable[[], Awaitable[object]], delay: float = AUTOSAVE_DELAY):
        self._save = save
        self.delay = delay
        self.is_saving = False
        self.last_error: Optional[ApiError] = None
        self._timer: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def touch(self) -> None:
        """Отметка об изменении: предыдущий таймер отменяется"""
        self.cancel()
        self._timer = asyncio.get_running_loop().create_task(self._save_later())

    def cancel(self) -> None:
        if self.pending:
            self._timer.cancel()
        self._timer = None

    async def flush(self) -> None:
        """Немедленное сохранение без ожидания таймера"""
        self.cancel()
        await self._run()

    async def _save_later(self) -> None:
        await asyncio.sleep(self.delay)
        self._timer = None
        await self._run()

    async def _run(self) -> None:
        self.is_saving = True
        try:
            await self._save()
            self.last_error = None
        except ApiError as e:
            logger.error("Autosave failed: %s", e)
            self.last_error = e
        finally:
            self.is_saving = False
