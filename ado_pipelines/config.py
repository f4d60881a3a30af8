"""Configuration management for ado-pipelines with structured settings and validation."""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from .errors import AdoConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_ENV_VAR = "AZURE_DEVOPS_PAT"
DEFAULT_BASE_URL = "https://dev.azure.com"
DEFAULT_API_VERSION = "7.0"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass
class AppConfig:
    """
    Settings for a single run of the pipeline listing tool.

    Everything the run needs from the process environment is captured here
    once, so the rest of the package never reads ``os.environ`` directly.
    """

    token_env_var: str = DEFAULT_TOKEN_ENV_VAR
    token: str | None = None
    shell: str = ""
    home_dir: str | None = None

    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    request_timeout_seconds: float | None = None

    log_level: str = "WARNING"

    def __post_init__(self):
        """Normalize and validate configuration values."""
        if not self.token:
            self.token = None
        self.shell = self.shell or ""
        self.base_url = (self.base_url or "").rstrip("/")
        self.log_level = (self.log_level or "WARNING").upper()

        self._validate()

    def _validate(self):
        """Validate the complete configuration."""
        if not self.token_env_var:
            raise AdoConfigurationError("token_env_var must not be empty")

        if not self.base_url.startswith(("http://", "https://")):
            raise AdoConfigurationError(
                "base_url must start with http:// or https://",
                context={"base_url": self.base_url},
            )

        if not self.api_version:
            raise AdoConfigurationError("api_version must not be empty")

        if self.request_timeout_seconds is not None and self.request_timeout_seconds <= 0:
            raise AdoConfigurationError(
                "request_timeout_seconds must be positive",
                context={"request_timeout_seconds": self.request_timeout_seconds},
            )

        if self.log_level not in _LOG_LEVELS:
            raise AdoConfigurationError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}",
                context={"log_level": self.log_level},
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides) -> "AppConfig":
        """
        Create configuration from environment variables with optional overrides.

        Args:
            environ: Mapping to read from, defaults to ``os.environ``
            **overrides: Configuration values to override

        Returns:
            AppConfig: Configured instance
        """
        env = os.environ if environ is None else environ
        token_env_var = overrides.pop("token_env_var", DEFAULT_TOKEN_ENV_VAR)

        timeout = env.get("ADO_REQUEST_TIMEOUT")
        try:
            request_timeout_seconds = float(timeout) if timeout else None
        except ValueError as e:
            raise AdoConfigurationError(
                "ADO_REQUEST_TIMEOUT must be a number",
                context={"ADO_REQUEST_TIMEOUT": timeout},
                original_exception=e,
            ) from e

        values = {
            "token_env_var": token_env_var,
            "token": env.get(token_env_var),
            "shell": env.get("SHELL", ""),
            "base_url": env.get("ADO_BASE_URL", DEFAULT_BASE_URL),
            "api_version": env.get("ADO_API_VERSION", DEFAULT_API_VERSION),
            "request_timeout_seconds": request_timeout_seconds,
            "log_level": env.get("ADO_LOG_LEVEL", "WARNING"),
        }
        values.update(overrides)

        config = cls(**values)
        logger.debug(
            f"Configuration loaded: base_url={config.base_url}, "
            f"api_version={config.api_version}, "
            f"token_in_env={config.token is not None}"
        )
        return config

    def token_from_environment(self) -> str | None:
        """
        Get the PAT that was present in the environment at startup.

        Returns:
            Optional[str]: The PAT, or None if the variable was unset or empty
        """
        return self.token
