"""
Configuration file loader for YAML and JSON files.

Supports loading ApiClientConfig from external configuration files.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..config import ApiClientConfig
from ..logging import LoggingConfig

CONFIG_FILE_ENV_VAR = "API_CLIENT_CONFIG_FILE"

_SCALAR_KEYS = ("base_url", "timeout", "retries", "retry_delay", "backoff_max")


class ConfigValidationError(Exception):
    """Raised when configuration file is invalid."""

    pass


class ConfigFileLoader:
    """
    Загрузчик конфигурации из файлов.

    Файл может содержать настройки на верхнем уровне или в секции
    ``api_client``:

        api_client:
          base_url: https://api.example.com
          timeout: 10
          retries: 2
          retry_delay: 0.5
          headers:
            Accept: application/json
          logging:
            level: DEBUG
            format: json

    Examples:
        >>> config = ConfigFileLoader.from_yaml("config.yaml")
        >>> config = ConfigFileLoader.from_json("config.json")
        >>> config = ConfigFileLoader.from_file("config.yaml")  # Auto-detect
        >>> config = ConfigFileLoader.from_env_path()  # From API_CLIENT_CONFIG_FILE
    """

    @staticmethod
    def from_yaml(path: Union[str, Path]) -> ApiClientConfig:
        """
        Загрузить конфиг из YAML файла.

        Raises:
            FileNotFoundError: Если файл не найден
            ConfigValidationError: Если конфиг невалидный
            ImportError: Если PyYAML не установлен
        """
        try:
            import yaml
        except ImportError:
            raise ImportError(
                "PyYAML is required to load YAML configs. "
                "Install it with: pip install api-client-core[yaml] or pip install pyyaml"
            )

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML syntax in {path}: {e}")

        if not data:
            raise ConfigValidationError(f"Empty config file: {path}")

        return ConfigFileLoader._build_config(data, str(path))

    @staticmethod
    def from_json(path: Union[str, Path]) -> ApiClientConfig:
        """
        Загрузить конфиг из JSON файла.

        Raises:
            FileNotFoundError: Если файл не найден
            ConfigValidationError: Если конфиг невалидный
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid JSON syntax in {path}: {e}")

        if not data:
            raise ConfigValidationError(f"Empty config file: {path}")

        return ConfigFileLoader._build_config(data, str(path))

    @staticmethod
    def from_file(path: Union[str, Path]) -> ApiClientConfig:
        """
        Автоопределение формата по расширению (.yaml, .yml, .json).

        Raises:
            ValueError: Если формат не поддерживается
        """
        path = Path(path)
        suffix = path.suffix.lower()

        if suffix in (".yaml", ".yml"):
            return ConfigFileLoader.from_yaml(path)
        elif suffix == ".json":
            return ConfigFileLoader.from_json(path)
        raise ValueError(
            f"Unsupported config file format: {suffix}. "
            f"Supported formats: .yaml, .yml, .json"
        )

    @staticmethod
    def from_env_path() -> Optional[ApiClientConfig]:
        """
        Загрузить из пути, указанного в API_CLIENT_CONFIG_FILE.

        Returns:
            ApiClientConfig или None, если переменная не задана
        """
        config_path = os.environ.get(CONFIG_FILE_ENV_VAR)
        if not config_path:
            return None

        return ConfigFileLoader.from_file(config_path)

    @staticmethod
    def _build_config(data: Any, source: str) -> ApiClientConfig:
        if isinstance(data, dict) and "api_client" in data:
            config_data = data["api_client"]
        else:
            config_data = data

        if not isinstance(config_data, dict):
            raise ConfigValidationError(
                f"Config must be a dictionary, got {type(config_data).__name__} in {source}"
            )

        kwargs: Dict[str, Any] = {
            key: config_data[key] for key in _SCALAR_KEYS if key in config_data
        }

        try:
            if "headers" in config_data:
                headers = config_data["headers"]
                if not isinstance(headers, dict):
                    raise ConfigValidationError(
                        f"headers must be a dictionary in {source}"
                    )
                kwargs["headers"] = {str(k): str(v) for k, v in headers.items()}

            if "logging" in config_data:
                logging_data = config_data["logging"]
                if not isinstance(logging_data, dict):
                    raise ConfigValidationError(
                        f"logging must be a dictionary in {source}"
                    )
                kwargs["logging"] = LoggingConfig.create(
                    level=logging_data.get("level", "INFO"),
                    format=logging_data.get("format", "text"),
                    enable_console=logging_data.get("enable_console", True),
                    enable_file=logging_data.get("enable_file", False),
                    file_path=logging_data.get("file_path"),
                    enable_correlation_id=logging_data.get("enable_correlation_id", True),
                    extra_fields=logging_data.get("extra_fields"),
                )

            return ApiClientConfig(**kwargs)

        except (ValueError, TypeError) as e:
            raise ConfigValidationError(f"Invalid config in {source}: {e}")
