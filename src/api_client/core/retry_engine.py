"""
Retry engine: решение о повторе и exponential backoff.

Правила:
- повторяем только is_retryable ошибки (network / 5xx)
- не больше ``retries`` повторов после первой попытки
- задержка попытки i: min(retry_delay * 2**i, backoff_max), без jitter
"""

import asyncio
import logging
from typing import Optional

from .config import DEFAULT_BACKOFF_MAX
from .exceptions import ApiError

logger = logging.getLogger(__name__)


def get_backoff_delay(
    attempt: int,
    base_delay: float,
    max_delay: float = DEFAULT_BACKOFF_MAX
) -> float:
    """
    Вычислить задержку перед следующей попыткой.

    Args:
        attempt: Номер попытки (с 0)
        base_delay: Базовая задержка (сек)
        max_delay: Потолок (сек)

    Returns:
        Секунды для ожидания

    Examples:
        >>> [get_backoff_delay(i, 1.0) for i in range(3)]
        [1.0, 2.0, 4.0]
        >>> get_backoff_delay(10, 1.0)
        30.0
    """
    return min(base_delay * (2 ** attempt), max_delay)


class RetryEngine:
    """
    Состояние retry для ОДНОГО вызова request().

    Создаётся на каждый запрос, поэтому параллельные запросы
    не делят счётчик попыток.

    Examples:
        >>> engine = RetryEngine(retries=2, retry_delay=1.0)
        >>> if engine.should_retry(error):
        ...     await engine.async_wait()
        ...     engine.increment()
    """

    def __init__(
        self,
        retries: int,
        retry_delay: float,
        backoff_max: float = DEFAULT_BACKOFF_MAX
    ):
        """
        Args:
            retries: Количество повторов после первой попытки
            retry_delay: Базовая задержка backoff (сек)
            backoff_max: Потолок задержки (сек)
        """
        if retries < 0:
            raise ValueError("retries must be non-negative")

        self.retries = retries
        self.retry_delay = retry_delay
        self.backoff_max = backoff_max
        self._attempt = 0

    @property
    def max_attempts(self) -> int:
        """Всего попыток, включая первую."""
        return self.retries + 1

    @property
    def attempt(self) -> int:
        """Текущая попытка (с 0)."""
        return self._attempt

    @property
    def is_last_attempt(self) -> bool:
        """Текущая попытка последняя разрешённая."""
        return self._attempt >= self.retries

    def should_retry(self, error: ApiError) -> bool:
        """
        Решить нужен ли retry после неудачной попытки.

        Args:
            error: Ошибка текущей попытки

        Returns:
            True если ошибка retryable и попытки ещё остались
        """
        if self.is_last_attempt:
            return False

        return error.is_retryable

    def get_wait_time(self) -> float:
        """Задержка перед следующей попыткой (сек)."""
        return get_backoff_delay(self._attempt, self.retry_delay, self.backoff_max)

    async def async_wait(self, cancel_event: Optional[asyncio.Event] = None) -> bool:
        """
        Подождать backoff перед следующей попыткой.

        Args:
            cancel_event: Внешний сигнал отмены (опционально)

        Returns:
            True если ожидание прервано cancel_event
        """
        wait_time = self.get_wait_time()
        logger.debug(
            f"Backoff {wait_time:.3f}s before attempt {self._attempt + 2}/{self.max_attempts}"
        )

        if cancel_event is None:
            await asyncio.sleep(wait_time)
            return False

        try:
            await asyncio.wait_for(cancel_event.wait(), timeout=wait_time)
        except asyncio.TimeoutError:
            return False
        return True

    def increment(self):
        """Увеличить счётчик попыток."""
        self._attempt += 1

    def reset(self):
        """Сбросить счётчик."""
        self._attempt = 0
