"""Azure DevOps client for the pipelines listing endpoint."""

import logging
from base64 import b64encode

import requests
from opentelemetry import trace
from pydantic import ValidationError

from .config import DEFAULT_API_VERSION, DEFAULT_BASE_URL, AppConfig
from .errors import (
    AdoAuthenticationError,
    AdoHttpError,
    AdoNetworkError,
    AdoResponseError,
    AdoTimeoutError,
)
from .models import Pipeline, PipelineListResult

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

CONTINUATION_HEADER = "x-ms-continuationtoken"


def build_pipelines_url(
    organization: str,
    project: str,
    base_url: str = DEFAULT_BASE_URL,
    api_version: str = DEFAULT_API_VERSION,
) -> str:
    """Return the pipelines listing URL for an organization and project."""
    return f"{base_url}/{organization}/{project}/_apis/pipelines?api-version={api_version}"


def basic_auth_header(token: str) -> dict[str, str]:
    """Basic auth header with an empty username and the PAT as password."""
    encoded_pat = b64encode(f":{token}".encode()).decode("ascii")
    return {"Authorization": f"Basic {encoded_pat}"}


def _status_text(response: requests.Response) -> str:
    reason = response.reason or ""
    return f"{response.status_code} {reason}".strip()


class PipelinesClient:
    """
    A client for listing pipelines through the Azure DevOps REST API.

    Sends a single authenticated GET per call; there is no retry and no
    pagination follow-up.

    Args:
        token (str): Personal Access Token used as the Basic auth password.
        config (AppConfig, optional): Base URL, API version and timeout settings.
        session (requests.Session, optional): Session to send requests with.
            A session passed in is not closed by ``close()``.
    """

    def __init__(
        self,
        token: str,
        config: AppConfig | None = None,
        session: requests.Session | None = None,
    ):
        self.config = config or AppConfig()
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.headers = {"Accept": "application/json", **basic_auth_header(token)}

    def close(self):
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit with cleanup."""
        self.close()

    def _validate_response(self, response: requests.Response, url: str) -> None:
        """
        Raise for anything other than a successful listing response.

        An invalid PAT gets 401/403 from most endpoints, but some return a
        200 HTML sign-in page instead.
        """
        status_text = _status_text(response)
        context = {"url": url, "status_code": response.status_code}

        if response.status_code in (401, 403):
            raise AdoAuthenticationError(
                f"failed to fetch pipelines, status: {status_text}",
                status_code=response.status_code,
                status_text=status_text,
                context=context,
            )

        if response.status_code != 200:
            raise AdoHttpError(
                f"failed to fetch pipelines, status: {status_text}",
                status_code=response.status_code,
                status_text=status_text,
                context=context,
            )

        content_type = response.headers.get("Content-Type", "")
        if "text/html" in content_type and "Sign In" in response.text:
            logger.error(
                "Authentication failed: Response contains sign-in page. "
                f"Response text: {response.text[:200]}..."
            )
            raise AdoAuthenticationError(
                "Authentication failed. The response contained a sign-in page, "
                "which likely means the Personal Access Token (PAT) is invalid or expired.",
                status_code=response.status_code,
                status_text=status_text,
                context=context,
            )

    def _send_request(self, url: str) -> requests.Response:
        kwargs = {"headers": self.headers}
        if self.config.request_timeout_seconds is not None:
            kwargs["timeout"] = self.config.request_timeout_seconds

        try:
            return self.session.get(url, **kwargs)
        except requests.exceptions.Timeout as e:
            raise AdoTimeoutError(
                f"Request timeout for GET {url}",
                timeout_seconds=self.config.request_timeout_seconds,
                context={"url": url},
                original_exception=e,
            ) from e
        except requests.exceptions.RequestException as e:
            raise AdoNetworkError(
                f"Network error for GET {url}: {e}",
                context={"url": url, "error_type": type(e).__name__},
                original_exception=e,
            ) from e

    def _decode(self, response: requests.Response, url: str) -> PipelineListResult:
        continuation_token = response.headers.get(CONTINUATION_HEADER) or None

        if not response.content:
            logger.debug(f"Empty response body from {url}")
            return PipelineListResult(continuation_token=continuation_token)

        try:
            data = response.json()
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object but got {type(data).__name__}")
            return PipelineListResult.model_validate(
                {**data, "continuation_token": continuation_token}
            )
        except (ValueError, ValidationError) as e:
            # requests' JSONDecodeError subclasses ValueError
            raise AdoResponseError(
                f"failed to decode pipelines response: {e}",
                context={"url": url},
                original_exception=e,
            ) from e

    def get_pipelines_page(self, organization: str, project: str) -> PipelineListResult:
        """
        Retrieve the first page of pipelines for a project.

        Args:
            organization (str): The Azure DevOps organization name.
            project (str): The project name or ID.

        Returns:
            PipelineListResult: The decoded response, pipelines in service order.

        Raises:
            AdoAuthenticationError: For 401/403 or sign-in page responses.
            AdoHttpError: For any other non-200 status.
            AdoNetworkError: For DNS, connection or TLS failures.
            AdoTimeoutError: If a configured timeout expires.
            AdoResponseError: If the body is not the expected JSON shape.
        """
        with tracer.start_as_current_span("ado_list_pipelines") as span:
            span.set_attribute("ado.operation", "list_pipelines")
            span.set_attribute("ado.organization", organization)
            span.set_attribute("ado.project", project)

            url = build_pipelines_url(
                organization, project, self.config.base_url, self.config.api_version
            )
            logger.info(f"Fetching pipelines for {organization}/{project} from: {url}")

            response = self._send_request(url)
            self._validate_response(response, url)
            result = self._decode(response, url)

            span.set_attribute("ado.pipelines_count", len(result.pipelines))
            logger.info(f"Retrieved {len(result.pipelines)} pipelines for {organization}/{project}")

            if result.count != len(result.pipelines):
                logger.debug(
                    f"Response count {result.count} differs from {len(result.pipelines)} pipelines returned"
                )

            return result

    def list_pipelines(self, organization: str, project: str) -> list[Pipeline]:
        """
        Retrieve the list of pipelines for a project.

        Only the first page is fetched; a warning is logged when the service
        reports more.
        """
        result = self.get_pipelines_page(organization, project)
        if result.has_more:
            logger.warning(
                f"Azure DevOps returned a continuation token; only the first "
                f"{len(result.pipelines)} pipelines are listed"
            )
        return result.pipelines
