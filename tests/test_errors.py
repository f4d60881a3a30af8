from requests.exceptions import ConnectionError as RequestsConnectionError

from ado_pipelines.errors import (
    AdoAuthenticationError,
    AdoConfigurationError,
    AdoError,
    AdoHttpError,
    AdoNetworkError,
    AdoTimeoutError,
    ShellConfigError,
)


class TestStructuredErrors:
    def test_ado_error_structure(self):
        error = AdoError(
            message="Test error",
            error_code="TEST_ERROR",
            context={"key": "value"},
            original_exception=ValueError("original"),
        )

        assert str(error) == "Test error", f"Expected 'Test error' but got '{str(error)}'"
        assert error.error_code == "TEST_ERROR", (
            f"Expected 'TEST_ERROR' but got '{error.error_code}'"
        )
        assert error.context == {"key": "value"}, (
            f"Expected {{'key': 'value'}} but got {error.context}"
        )
        assert isinstance(error.original_exception, ValueError), (
            f"Expected ValueError but got {type(error.original_exception)}"
        )

    def test_authentication_error_is_an_http_error(self):
        error = AdoAuthenticationError(
            "failed to fetch pipelines, status: 401 Unauthorized",
            status_code=401,
            status_text="401 Unauthorized",
        )

        assert isinstance(error, AdoHttpError), "Authentication errors should be HTTP errors"
        assert error.error_code == "ADO_AUTH_FAILED", (
            f"Expected 'ADO_AUTH_FAILED' but got '{error.error_code}'"
        )
        assert error.context["status_code"] == 401, (
            f"Expected status_code 401 in context but got {error.context}"
        )
        assert error.status_text == "401 Unauthorized"

    def test_http_error_defaults(self):
        error = AdoHttpError(status_code=500, status_text="500 Internal Server Error")

        assert error.error_code == "ADO_HTTP_ERROR"
        assert error.status_code == 500

    def test_shell_config_error_records_path(self):
        error = ShellConfigError("failed to read shell config file", path="/home/me/.bashrc")

        assert error.error_code == "ADO_SHELL_CONFIG_ERROR"
        assert error.path == "/home/me/.bashrc"
        assert error.context["path"] == "/home/me/.bashrc"

    def test_network_and_timeout_errors(self):
        network = AdoNetworkError("boom", original_exception=RequestsConnectionError("refused"))
        timeout = AdoTimeoutError("slow", timeout_seconds=5)

        assert network.error_code == "ADO_NETWORK_ERROR"
        assert isinstance(network.original_exception, RequestsConnectionError)
        assert timeout.context["timeout_seconds"] == 5
        assert timeout.timeout_seconds == 5

    def test_all_errors_share_base(self):
        for cls in (AdoConfigurationError, ShellConfigError, AdoNetworkError, AdoTimeoutError):
            assert issubclass(cls, AdoError), f"{cls.__name__} should derive from AdoError"
