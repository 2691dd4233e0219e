"""
Единый тип ошибки API Client.

Классификация (производные свойства, не подклассы):
- is_network_error - ответа не было (status 0/None): сеть, DNS, таймаут
- is_client_error  - 4xx, НЕ ретраить никогда
- is_server_error  - 5xx, можно ретраить
- is_retryable     - network или server
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx

# Статус "ответ не получен"
NO_RESPONSE = 0

TIMEOUT_MESSAGE = "Request timeout"
CANCELLED_MESSAGE = "Request cancelled"
NETWORK_ERROR_MESSAGE = "Network error"


class ApiError(Exception):
    """
    Структурированная ошибка запроса.

    Args:
        message: Сообщение об ошибке
        status: HTTP статус код или NO_RESPONSE
        data: Распарсенное тело ответа (если было)

    Examples:
        >>> error = ApiError("Not found", 404, {"detail": "missing"})
        >>> error.is_client_error
        True
        >>> error.is_retryable
        False
    """

    def __init__(self, message: str, status: Optional[int] = NO_RESPONSE, data: Any = None):
        self.message = message
        self.status = status
        self.data = data
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    @property
    def is_network_error(self) -> bool:
        """Ответ не был получен."""
        return self.status is None or self.status == NO_RESPONSE

    @property
    def is_client_error(self) -> bool:
        """4xx."""
        return self.status is not None and 400 <= self.status < 500

    @property
    def is_server_error(self) -> bool:
        """5xx."""
        return self.status is not None and self.status >= 500

    @property
    def is_retryable(self) -> bool:
        """Повтор без изменения запроса может помочь."""
        return self.is_network_error or self.is_server_error

    def to_dict(self) -> Dict[str, Any]:
        """Представление для логов."""
        return {
            "message": self.message,
            "status": self.status,
            "data": self.data,
            "timestamp": self.timestamp,
            "is_network_error": self.is_network_error,
            "is_client_error": self.is_client_error,
            "is_server_error": self.is_server_error,
            "is_retryable": self.is_retryable,
        }

    def __repr__(self) -> str:
        return f"ApiError(message={self.message!r}, status={self.status!r})"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# УТИЛИТЫ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def error_from_response(response: httpx.Response, data: Any) -> ApiError:
    """
    Построить ApiError для не-2xx ответа.

    Сообщение берётся из поля ``message`` тела, иначе синтезируется
    как ``HTTP {status}: {reason}``.
    """
    message = None
    if isinstance(data, dict):
        message = data.get("message")

    if not message:
        message = f"HTTP {response.status_code}: {response.reason_phrase}"

    return ApiError(message, response.status_code, data)


def classify_transport_exception(exc: BaseException) -> ApiError:
    """
    Конвертировать исключение транспорта (httpx / asyncio) в ApiError.

    Examples:
        >>> err = classify_transport_exception(httpx.ConnectError("refused"))
        >>> err.is_network_error
        True
    """
    if isinstance(exc, ApiError):
        return exc

    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)):
        return ApiError(TIMEOUT_MESSAGE, NO_RESPONSE)

    return ApiError(str(exc) or NETWORK_ERROR_MESSAGE, NO_RESPONSE)
