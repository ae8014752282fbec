"""Configuration settings for tauri-template-setup.

Settings can be overridden via environment variables with prefix TAURI_SETUP_
"""

import os
from typing import Literal

ENV_PREFIX = "TAURI_SETUP_"


class Settings:
    """Configuration settings for a setup run.

    Environment variables take precedence over defaults but are overridden
    by keyword arguments passed to __init__.

    Example:
        >>> settings = Settings()
        >>> settings.log_level
        'WARNING'

        With environment variable:
        >>> os.environ["TAURI_SETUP_FORCE"] = "1"
        >>> Settings().force
        True
    """

    def __init__(
        self,
        log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | None = None,
        json_logs: bool | None = None,
        include_timestamp: bool | None = None,
        force: bool | None = None,
    ) -> None:
        """Initialize settings from environment variables or keyword arguments.

        Args:
            log_level: Logging level. Defaults to WARNING so interactive runs
                only show status lines. Overridden by TAURI_SETUP_LOG_LEVEL.
            json_logs: If True, output JSON logs. Defaults to False.
                Overridden by TAURI_SETUP_JSON_LOGS.
            include_timestamp: Whether to include timestamps in logs.
                Defaults to True. Overridden by TAURI_SETUP_INCLUDE_TIMESTAMP.
            force: Skip the template-repository heuristic and personalize
                even when the checkout looks like the template itself.
                Defaults to False. Overridden by TAURI_SETUP_FORCE.
        """
        self.log_level: str = (
            log_level
            if log_level is not None
            else self._get_str_env(f"{ENV_PREFIX}LOG_LEVEL", "WARNING").upper()
        )

        self.json_logs: bool = (
            json_logs
            if json_logs is not None
            else self._get_bool_env(f"{ENV_PREFIX}JSON_LOGS", default=False)
        )

        self.include_timestamp: bool = (
            include_timestamp
            if include_timestamp is not None
            else self._get_bool_env(f"{ENV_PREFIX}INCLUDE_TIMESTAMP", default=True)
        )

        self.force: bool = (
            force if force is not None else self._get_bool_env(f"{ENV_PREFIX}FORCE", default=False)
        )

    def _get_bool_env(self, key: str, default: bool) -> bool:
        """Get boolean value from environment variable.

        Args:
            key: Environment variable name.
            default: Default value if environment variable is not set.

        Returns:
            Boolean value from environment or default. Interprets "true", "1",
            "yes", and "on" (case-insensitive) as True.
        """
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("true", "1", "yes", "on")

    def _get_str_env(self, key: str, default: str) -> str:
        """Get string value from environment variable.

        Args:
            key: Environment variable name.
            default: Default value if environment variable is not set.

        Returns:
            String value from environment or default.
        """
        return os.getenv(key, default)
