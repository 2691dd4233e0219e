# src/api_client/core/client.py
"""
Асинхронный API клиент на базе httpx.

Таймаут на каждую попытку, retry с exponential backoff, цепочки
интерсепторов и единый тип ошибки ApiError.
"""

import asyncio
import itertools
import logging
import time
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import httpx

from .config import ApiClientConfig
from .context import RequestDescriptor
from .exceptions import (
    ApiError,
    CANCELLED_MESSAGE,
    NO_RESPONSE,
    TIMEOUT_MESSAGE,
    classify_transport_exception,
    error_from_response,
)
from .interceptors import (
    InterceptorChain,
    RequestInterceptor,
    ResponseInterceptor,
    apply_request_interceptors,
    apply_response_interceptors,
)
from .logging import ApiClientLogger, LoggingConfig, reset_correlation_id, set_correlation_id
from .retry_engine import RetryEngine
from ..utils.sanitizer import mask_url
from ..utils.serialization import parse_response_body, serialize_body

logger = logging.getLogger(__name__)

# Суффикс имени логгера: у каждого клиента свой stdlib logger
_logger_ids = itertools.count(1)


class _Cancelled(Exception):
    """Внешняя отмена: прерывает цикл попыток без retry."""

    def __init__(self, error: ApiError):
        self.error = error
        super().__init__(error.message)


class ApiClient:
    """
    Асинхронный API клиент.

    Example:
        >>> async with ApiClient("https://api.example.com", retries=2) as client:
        ...     client.add_request_interceptor(
        ...         lambda d: d.with_headers({"Authorization": "Bearer token123"})
        ...     )
        ...     users = await client.get("/users")
        ...     created = await client.post("/users", {"name": "alice"})

    Features:
        - Таймаут на каждую попытку (не на весь запрос)
        - Retry network/5xx ошибок с backoff min(delay * 2**i, backoff_max)
        - 4xx никогда не ретраятся
        - Request/response интерсепторы в порядке регистрации
        - JSON или текст по content-type
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        config: Optional[ApiClientConfig] = None,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        logging: Optional[LoggingConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Инициализация клиента. I/O не выполняется: httpx клиент и
        handlers логирования создаются при первом запросе или в __aenter__.

        Невалидные значения (timeout <= 0, отрицательные retries / retry_delay)
        - единственный случай, когда конструктор падает: ValueError из
        ApiClientConfig, до первого запроса.

        Args:
            base_url: Базовый адрес (по умолчанию "/api")
            config: ApiClientConfig (если указан, остальные параметры конфига игнорируются)
            timeout: Таймаут одной попытки (сек)
            retries: Повторов после первой попытки
            retry_delay: Базовая задержка backoff (сек)
            headers: Дефолтные заголовки (заменяют {"Content-Type": "application/json"})
            logging: LoggingConfig (None = без логов)
            transport: httpx транспорт (например httpx.MockTransport в тестах)
            http_client: Готовый httpx.AsyncClient (не закрывается в close())
        """
        if config is None:
            config = ApiClientConfig.create(
                base_url=base_url,
                timeout=timeout,
                retries=retries,
                retry_delay=retry_delay,
                headers=headers,
                logging=logging,
            )
        self._config = config

        self._request_interceptors: InterceptorChain[RequestInterceptor] = InterceptorChain()
        self._response_interceptors: InterceptorChain[ResponseInterceptor] = InterceptorChain()

        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = http_client
        self._owns_client = http_client is None

        self._logger: Optional[ApiClientLogger] = None
        self._logger_name = _build_logger_name(config.base_url)

    def _get_logger(self) -> Optional[ApiClientLogger]:
        """Создать логгер при первом использовании (None без config.logging)."""
        if self._logger is None and self._config.logging:
            self._logger = ApiClientLogger(config=self._config.logging, name=self._logger_name)
        return self._logger

    async def _get_client(self) -> httpx.AsyncClient:
        """Получить или создать httpx клиент."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                transport=self._transport,
                timeout=self._config.timeout,
            )
        return self._client

    async def __aenter__(self) -> "ApiClient":
        await self._get_client()
        self._get_logger()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Закрыть клиент и освободить ресурсы. Повторный вызов безопасен."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

        if self._logger is not None:
            self._logger.close()
            self._logger = None

    # ==================== Интерсепторы ====================

    def add_request_interceptor(self, interceptor: RequestInterceptor) -> None:
        """
        Добавить request интерсептор в конец цепочки.

        Применяется ко всем последующим вызовам, не к уже начатым.
        """
        self._request_interceptors.add(interceptor)

    def add_response_interceptor(self, interceptor: ResponseInterceptor) -> None:
        """Добавить response интерсептор в конец цепочки."""
        self._response_interceptors.add(interceptor)

    # ==================== URL ====================

    def build_url(self, path: str) -> str:
        """
        Склеить base_url и path через ровно один слэш.

        Examples:
            >>> ApiClient("https://api.example.com/").build_url("/users")
            'https://api.example.com/users'
        """
        base = self._config.base_url
        if base.endswith("/"):
            base = base[:-1]
        if path.startswith("/"):
            path = path[1:]
        return f"{base}/{path}"

    # ==================== Запрос ====================

    def _build_descriptor(
        self,
        path: str,
        method: str,
        body: Any,
        headers: Optional[Dict[str, str]],
        timeout: Optional[float],
        retries: Optional[int],
        retry_delay: Optional[float],
        transport_options: Dict[str, Any],
    ) -> RequestDescriptor:
        merged_headers = dict(self._config.headers)
        if headers:
            merged_headers.update(headers)

        descriptor = RequestDescriptor(
            method=method.upper(),
            path=path,
            timeout=self._config.timeout if timeout is None else timeout,
            retries=self._config.retries if retries is None else retries,
            retry_delay=self._config.retry_delay if retry_delay is None else retry_delay,
            headers=merged_headers,
            extra=dict(transport_options),
        )

        if body is not None and descriptor.method != "GET":
            descriptor.body = serialize_body(body)

        return descriptor

    async def request(
        self,
        path: str,
        *,
        method: str = "GET",
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
        cancel_event: Optional[asyncio.Event] = None,
        **transport_options: Any,
    ) -> Any:
        """
        Выполнить запрос с таймаутом на попытку и retry.

        Args:
            path: Путь относительно base_url
            method: HTTP метод
            body: Тело (не отправляется для GET); не-строки сериализуются в JSON
            headers: Заголовки поверх дефолтных
            timeout: Таймаут одной попытки (сек)
            retries: Повторов после первой попытки
            retry_delay: Базовая задержка backoff (сек)
            cancel_event: asyncio.Event для внешней отмены
            **transport_options: Передаются в httpx как есть (params, cookies, ...)

        Returns:
            Распарсенное тело после response интерсепторов

        Raises:
            ApiError: Единственный тип ошибки (network / 4xx / 5xx / timeout / cancel)
        """
        descriptor = self._build_descriptor(
            path, method, body, headers, timeout, retries, retry_delay, transport_options
        )

        descriptor = await apply_request_interceptors(
            self._request_interceptors.snapshot(), descriptor
        )
        response_interceptors = self._response_interceptors.snapshot()

        url = self.build_url(descriptor.path)
        retry_engine = RetryEngine(
            descriptor.retries, descriptor.retry_delay, self._config.backoff_max
        )

        self._get_logger()
        token = set_correlation_id(descriptor.request_id)
        start_time = time.monotonic()

        if self._logger:
            self._logger.info(
                "Request started",
                method=descriptor.method,
                request_id=descriptor.request_id,
                url=mask_url(url),
                timeout=descriptor.timeout,
                max_retries=descriptor.retries,
            )

        try:
            while True:
                try:
                    response = await self._send(descriptor, url, cancel_event)
                    data = self._read_body(response)
                    if not response.is_success:
                        raise error_from_response(response, data)

                except _Cancelled as cancelled:
                    self._log_failure(descriptor, url, cancelled.error, retry_engine, start_time)
                    raise cancelled.error from None

                except ApiError as error:
                    if not retry_engine.should_retry(error):
                        self._log_failure(descriptor, url, error, retry_engine, start_time)
                        raise

                    wait_time = retry_engine.get_wait_time()
                    self._log_retry(descriptor, url, error, retry_engine, wait_time, start_time)

                    if await retry_engine.async_wait(cancel_event):
                        cancelled_error = ApiError(CANCELLED_MESSAGE, NO_RESPONSE)
                        self._log_failure(descriptor, url, cancelled_error, retry_engine, start_time)
                        raise cancelled_error from None

                    retry_engine.increment()
                    continue

                result = await apply_response_interceptors(response_interceptors, response, data)

                if self._logger:
                    self._logger.info(
                        "Request completed",
                        method=descriptor.method,
                        request_id=descriptor.request_id,
                        url=mask_url(url),
                        status_code=response.status_code,
                        attempt=retry_engine.attempt + 1,
                        duration_ms=_elapsed_ms(start_time),
                    )

                return result
        finally:
            reset_correlation_id(token)

    async def _send(
        self,
        descriptor: RequestDescriptor,
        url: str,
        cancel_event: Optional[asyncio.Event],
    ) -> httpx.Response:
        """
        Одна попытка под собственным таймаутом.

        Таймаут (и ожидание cancel_event) существует только на время этой
        попытки; по истечении отменяется только этот вызов транспорта.
        """
        client = await self._get_client()

        call = asyncio.ensure_future(client.request(
            descriptor.method,
            url,
            headers=descriptor.headers,
            content=descriptor.body,
            timeout=descriptor.timeout,
            **descriptor.extra,
        ))
        waiters = {call}

        cancel_waiter = None
        if cancel_event is not None:
            cancel_waiter = asyncio.ensure_future(cancel_event.wait())
            waiters.add(cancel_waiter)

        try:
            done, _ = await asyncio.wait(
                waiters, timeout=descriptor.timeout, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            if cancel_waiter is not None:
                cancel_waiter.cancel()
            if not call.done():
                call.cancel()

        if call in done:
            try:
                return call.result()
            except Exception as exc:
                raise classify_transport_exception(exc) from exc

        # Дать отменённому вызову завершиться до следующей попытки
        await asyncio.wait({call})
        if not call.cancelled():
            call.exception()

        if cancel_waiter is not None and cancel_waiter in done:
            raise _Cancelled(ApiError(CANCELLED_MESSAGE, NO_RESPONSE))

        raise ApiError(TIMEOUT_MESSAGE, NO_RESPONSE)

    @staticmethod
    def _read_body(response: httpx.Response) -> Any:
        """Распарсить тело; битый JSON в 2xx - ApiError, в ошибке - текст."""
        try:
            return parse_response_body(response)
        except ValueError as e:
            if response.is_success:
                raise ApiError(
                    f"Invalid JSON response: {e}", response.status_code, response.text
                ) from e
            return response.text

    # ==================== Логирование ====================

    def _log_retry(
        self,
        descriptor: RequestDescriptor,
        url: str,
        error: ApiError,
        retry_engine: RetryEngine,
        wait_time: float,
        start_time: float,
    ) -> None:
        attempt = retry_engine.attempt + 1
        logger.debug(
            f"{descriptor.method} {mask_url(url)} failed ({error.message}), "
            f"retrying in {wait_time:.3f}s (attempt {attempt}/{descriptor.retries})"
        )
        if self._logger:
            self._logger.warning(
                "Request error (will retry)",
                method=descriptor.method,
                request_id=descriptor.request_id,
                url=mask_url(url),
                error=error.message,
                status=error.status,
                attempt=attempt,
                max_attempts=retry_engine.max_attempts,
                wait_time_s=round(wait_time, 3),
                duration_ms=_elapsed_ms(start_time),
            )

    def _log_failure(
        self,
        descriptor: RequestDescriptor,
        url: str,
        error: ApiError,
        retry_engine: RetryEngine,
        start_time: float,
    ) -> None:
        if self._logger:
            self._logger.error(
                "Request failed",
                method=descriptor.method,
                request_id=descriptor.request_id,
                url=mask_url(url),
                error=error.message,
                status=error.status,
                retryable=error.is_retryable,
                attempt=retry_engine.attempt + 1,
                max_attempts=retry_engine.max_attempts,
                duration_ms=_elapsed_ms(start_time),
            )

    # ==================== Удобные методы ====================

    async def get(self, path: str, **options: Any) -> Any:
        """GET запрос. Тело никогда не отправляется."""
        _drop_option(options, "body", "GET")
        _drop_option(options, "method", "GET")
        return await self.request(path, method="GET", **options)

    async def post(self, path: str, body: Any = None, **options: Any) -> Any:
        """POST запрос."""
        _drop_option(options, "method", "POST")
        return await self.request(path, method="POST", body=body, **options)

    async def put(self, path: str, body: Any = None, **options: Any) -> Any:
        """PUT запрос."""
        _drop_option(options, "method", "PUT")
        return await self.request(path, method="PUT", body=body, **options)

    async def patch(self, path: str, body: Any = None, **options: Any) -> Any:
        """PATCH запрос."""
        _drop_option(options, "method", "PATCH")
        return await self.request(path, method="PATCH", body=body, **options)

    async def delete(self, path: str, **options: Any) -> Any:
        """DELETE запрос."""
        _drop_option(options, "method", "DELETE")
        return await self.request(path, method="DELETE", **options)

    # ==================== Properties ====================

    @property
    def config(self) -> ApiClientConfig:
        """Текущая конфигурация (immutable)."""
        return self._config

    @property
    def base_url(self) -> str:
        """Базовый адрес."""
        return self._config.base_url


def _elapsed_ms(start_time: float) -> float:
    return round((time.monotonic() - start_time) * 1000, 2)


def _build_logger_name(base_url: str) -> str:
    netloc = urlparse(base_url).netloc
    prefix = f"api_client.{netloc}" if netloc else "api_client"
    return f"{prefix}.{next(_logger_ids)}"


def _drop_option(options: Dict[str, Any], key: str, method: str) -> None:
    """Убрать опцию, которую verb метод задаёт сам."""
    if key in options:
        options.pop(key)
        logger.debug(f"{method}: ignoring '{key}' passed to verb method")
