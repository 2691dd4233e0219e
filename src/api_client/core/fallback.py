"""
Data access with an explicit fallback policy.

Слой доступа к данным решает, идти ли в сеть или отдать локально
сгенерированные данные. Политика передаётся явно при создании, а не
выводится из режима сборки или окружения.

Example:
    >>> async def mock_leads(method, path, error):
    ...     return {"data": [], "source": "mock"}
    >>>
    >>> source = DataSource(client, provider=mock_leads,
    ...                     policy=FallbackPolicy(on_error=lambda e: e.is_network_error))
    >>> leads = await source.get("/leads")
"""

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

from .client import ApiClient
from .exceptions import ApiError

logger = logging.getLogger(__name__)


class FallbackProvider(Protocol):
    """
    Источник локальных данных.

    Args:
        method: HTTP метод запроса
        path: Путь запроса
        error: Ошибка сети, или None если сеть пропущена (bypass_network)
    """

    def __call__(self, method: str, path: str, error: Optional[ApiError]) -> Any:
        ...


def _always(error: ApiError) -> bool:
    return True


@dataclass(frozen=True)
class FallbackPolicy:
    """
    Когда использовать FallbackProvider.

    Args:
        bypass_network: Никогда не ходить в сеть (режим mock данных)
        on_error: Предикат по ApiError; True - отдать fallback вместо ошибки
        simulated_delay: Искусственная задержка перед fallback ответом (сек)
    """
    bypass_network: bool = False
    on_error: Callable[[ApiError], bool] = _always
    simulated_delay: float = 0.0

    def __post_init__(self):
        if self.simulated_delay < 0:
            raise ValueError("simulated_delay must be non-negative")


class DataSource:
    """
    Обёртка над ApiClient для data-access слоя.

    Без provider работает как прозрачный прокси к клиенту.
    """

    def __init__(
        self,
        client: ApiClient,
        provider: Optional[FallbackProvider] = None,
        policy: Optional[FallbackPolicy] = None,
    ):
        self._client = client
        self._provider = provider
        self._policy = policy or FallbackPolicy()

        if self._policy.bypass_network and provider is None:
            raise ValueError("bypass_network requires a fallback provider")

    @property
    def client(self) -> ApiClient:
        return self._client

    @property
    def policy(self) -> FallbackPolicy:
        return self._policy

    async def _fallback(self, method: str, path: str, error: Optional[ApiError]) -> Any:
        if self._policy.simulated_delay:
            await asyncio.sleep(self._policy.simulated_delay)

        result = self._provider(method, path, error)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def request(self, path: str, *, method: str = "GET", **options: Any) -> Any:
        """
        Запрос через клиент с учётом политики.

        Raises:
            ApiError: Если fallback не настроен или политика его не разрешает
        """
        method = method.upper()

        if self._policy.bypass_network:
            return await self._fallback(method, path, None)

        try:
            return await self._client.request(path, method=method, **options)
        except ApiError as error:
            if self._provider is None or not self._policy.on_error(error):
                raise

            logger.warning(
                f"{method} {path} failed ({error.message}), using fallback data"
            )
            return await self._fallback(method, path, error)

    async def get(self, path: str, **options: Any) -> Any:
        options.pop("body", None)
        return await self.request(path, method="GET", **options)

    async def post(self, path: str, body: Any = None, **options: Any) -> Any:
        return await self.request(path, method="POST", body=body, **options)

    async def put(self, path: str, body: Any = None, **options: Any) -> Any:
        return await self.request(path, method="PUT", body=body, **options)

    async def patch(self, path: str, body: Any = None, **options: Any) -> Any:
        return await self.request(path, method="PATCH", body=body, **options)

    async def delete(self, path: str, **options: Any) -> Any:
        return await self.request(path, method="DELETE", **options)
