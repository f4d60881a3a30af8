from typing import Any


class AdoError(Exception):
    """Base exception class for ADO-related errors with structured error information."""

    def __init__(
        self,
        message: str,
        error_code: str,
        context: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        """
        Initialize structured ADO error.

        Args:
            message: Human-readable error message
            error_code: Structured error code for programmatic handling
            context: Additional context information about the error
            original_exception: The original exception that caused this error
        """
        super().__init__(message)
        self.error_code = error_code
        self.context = context or {}
        self.original_exception = original_exception


class AdoConfigurationError(AdoError):
    """Exception for configuration and missing-input errors."""

    def __init__(
        self,
        message: str = "Configuration error",
        context: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            error_code="ADO_CONFIG_ERROR",
            context=context,
            original_exception=original_exception,
        )


class ShellConfigError(AdoError):
    """Exception for failures while persisting the PAT into a shell startup file."""

    def __init__(
        self,
        message: str = "Shell configuration error",
        path: str | None = None,
        context: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        context = context or {}
        if path:
            context["path"] = path

        super().__init__(
            message=message,
            error_code="ADO_SHELL_CONFIG_ERROR",
            context=context,
            original_exception=original_exception,
        )
        self.path = path


class AdoNetworkError(AdoError):
    """Exception for network-related failures."""

    def __init__(
        self,
        message: str = "Network error occurred",
        context: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            error_code="ADO_NETWORK_ERROR",
            context=context,
            original_exception=original_exception,
        )


class AdoTimeoutError(AdoError):
    """Exception for ADO operation timeouts."""

    def __init__(
        self,
        message: str = "Operation timed out",
        timeout_seconds: float | None = None,
        context: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        context = context or {}
        if timeout_seconds:
            context["timeout_seconds"] = timeout_seconds

        super().__init__(
            message=message,
            error_code="ADO_TIMEOUT",
            context=context,
            original_exception=original_exception,
        )
        self.timeout_seconds = timeout_seconds


class AdoHttpError(AdoError):
    """Exception for non-200 responses from the ADO REST API."""

    def __init__(
        self,
        message: str = "Unexpected HTTP status",
        status_code: int | None = None,
        status_text: str | None = None,
        context: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
        error_code: str = "ADO_HTTP_ERROR",
    ):
        context = context or {}
        if status_code is not None:
            context["status_code"] = status_code

        super().__init__(
            message=message,
            error_code=error_code,
            context=context,
            original_exception=original_exception,
        )
        self.status_code = status_code
        self.status_text = status_text


class AdoAuthenticationError(AdoHttpError):
    """Custom exception for ADO authentication failures."""

    def __init__(
        self,
        message: str = "Authentication failed",
        status_code: int | None = None,
        status_text: str | None = None,
        context: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            status_code=status_code,
            status_text=status_text,
            context=context,
            original_exception=original_exception,
            error_code="ADO_AUTH_FAILED",
        )


class AdoResponseError(AdoError):
    """Exception for response bodies that cannot be decoded into the expected shape."""

    def __init__(
        self,
        message: str = "Could not decode response",
        context: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            error_code="ADO_RESPONSE_ERROR",
            context=context,
            original_exception=original_exception,
        )
