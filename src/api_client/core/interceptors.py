"""
Цепочки интерсепторов запросов и ответов.

Интерсептор - любой callable (функция, lambda, корутина, объект с __call__).
Цепочка применяется как fold: выход интерсептора i - вход интерсептора i+1,
строго в порядке регистрации.
"""

import inspect
from typing import Any, Awaitable, Generic, List, Optional, Protocol, TypeVar, Union

import httpx

from .context import RequestDescriptor

T = TypeVar("T")


class RequestInterceptor(Protocol):
    """
    Трансформация исходящего запроса.

    Может вернуть новый дескриптор, изменить переданный и вернуть None,
    либо вернуть awaitable с результатом.

    Example:
        >>> def add_auth(desc: RequestDescriptor) -> RequestDescriptor:
        ...     return desc.with_headers({"Authorization": "Bearer token123"})
    """

    def __call__(
        self,
        descriptor: RequestDescriptor
    ) -> Union[Optional[RequestDescriptor], Awaitable[Optional[RequestDescriptor]]]:
        ...


class ResponseInterceptor(Protocol):
    """
    Трансформация распарсенного тела успешного ответа.

    Example:
        >>> async def unwrap(response, data):
        ...     return data["data"]
    """

    def __call__(self, response: httpx.Response, data: Any) -> Any:
        ...


async def _resolve(value: Any) -> Any:
    """Дождаться результата, если интерсептор асинхронный."""
    if inspect.isawaitable(value):
        return await value
    return value


class InterceptorChain(Generic[T]):
    """
    Упорядоченный список интерсепторов.

    Добавление - только в конец, без дедупликации и без удаления.
    """

    def __init__(self):
        self._interceptors: List[T] = []

    def add(self, interceptor: T) -> None:
        """Добавить интерсептор в конец цепочки."""
        if not callable(interceptor):
            raise TypeError(f"Interceptor must be callable, got {type(interceptor).__name__}")
        self._interceptors.append(interceptor)

    def snapshot(self) -> List[T]:
        """Копия текущего списка (для одного вызова request)."""
        return list(self._interceptors)

    def __len__(self) -> int:
        return len(self._interceptors)

    def __iter__(self):
        return iter(self.snapshot())


async def apply_request_interceptors(
    interceptors: List[RequestInterceptor],
    descriptor: RequestDescriptor
) -> RequestDescriptor:
    """
    Применить request интерсепторы по порядку.

    None от интерсептора означает "дескриптор изменён на месте".
    """
    current = descriptor
    for interceptor in interceptors:
        result = await _resolve(interceptor(current))
        if result is not None:
            if not isinstance(result, RequestDescriptor):
                raise TypeError(
                    f"Request interceptor {interceptor!r} returned "
                    f"{type(result).__name__}, expected RequestDescriptor"
                )
            current = result
    return current


async def apply_response_interceptors(
    interceptors: List[ResponseInterceptor],
    response: httpx.Response,
    data: Any
) -> Any:
    """Применить response интерсепторы по порядку."""
    current = data
    for interceptor in interceptors:
        current = await _resolve(interceptor(response, current))
    return current
