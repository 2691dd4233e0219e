"""
Система конфигурации для API Client.

Конфиг immutable (frozen dataclass): создаётся один раз корнем композиции,
per-call параметры его не меняют.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .logging import LoggingConfig

DEFAULT_BASE_URL = "/api"
DEFAULT_TIMEOUT = 30.0
DEFAULT_RETRIES = 3
DEFAULT_RETRY_DELAY = 1.0
DEFAULT_BACKOFF_MAX = 30.0


def _default_headers() -> Mapping[str, str]:
    return MappingProxyType({"Content-Type": "application/json"})


@dataclass(frozen=True)
class ApiClientConfig:
    """
    Главная конфигурация ApiClient.

    Args:
        base_url: Базовый адрес (слэш в конце нормализуется в build_url)
        timeout: Таймаут одной попытки (сек)
        retries: Количество повторов ПОСЛЕ первой попытки
        retry_delay: Базовая задержка backoff (сек)
        backoff_max: Потолок задержки backoff (сек)
        headers: Дефолтные заголовки
        logging: Конфигурация логирования (None = без логов)

    Examples:
        >>> ApiClientConfig(base_url="https://api.example.com")
        >>> ApiClientConfig.create(timeout=5, retries=0)
    """
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    retries: int = DEFAULT_RETRIES
    retry_delay: float = DEFAULT_RETRY_DELAY
    backoff_max: float = DEFAULT_BACKOFF_MAX
    headers: Mapping[str, str] = field(default_factory=_default_headers)
    logging: Optional['LoggingConfig'] = None

    def __post_init__(self):
        """Валидация и заморозка заголовков."""
        if isinstance(self.headers, dict):
            object.__setattr__(self, 'headers', MappingProxyType(dict(self.headers)))

        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.retries < 0:
            raise ValueError("retries must be non-negative")
        if self.retry_delay < 0:
            raise ValueError("retry_delay must be non-negative")
        if self.backoff_max < 0:
            raise ValueError("backoff_max must be non-negative")

    @classmethod
    def create(
        cls,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        logging: Optional['LoggingConfig'] = None,
        **kwargs: Any
    ) -> 'ApiClientConfig':
        """
        Частичная конфигурация поверх дефолтов.

        None означает "взять дефолт". Переданные headers заменяют
        дефолтный набор целиком.

        Example:
            >>> config = ApiClientConfig.create(base_url="https://api.example.com", retries=0)
            >>> config.timeout
            30.0
        """
        values: Dict[str, Any] = {
            'base_url': base_url,
            'timeout': timeout,
            'retries': retries,
            'retry_delay': retry_delay,
            'headers': headers,
            'logging': logging,
        }
        values.update(kwargs)

        return cls(**{k: v for k, v in values.items() if v is not None})

    def with_headers(self, headers: Dict[str, str]) -> 'ApiClientConfig':
        """
        Новый конфиг с дополнительными заголовками.

        Example:
            >>> new_config = config.with_headers({"X-API-Key": "secret"})
        """
        merged = dict(self.headers)
        merged.update(headers)
        return replace(self, headers=merged)

    def with_retries(self, retries: int, retry_delay: Optional[float] = None) -> 'ApiClientConfig':
        """Новый конфиг с другой retry политикой."""
        if retry_delay is None:
            retry_delay = self.retry_delay
        return replace(self, retries=retries, retry_delay=retry_delay)

    def with_timeout(self, timeout: float) -> 'ApiClientConfig':
        """Новый конфиг с другим таймаутом."""
        return replace(self, timeout=timeout)
