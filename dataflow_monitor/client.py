"""Dataflow Messages Client Implementation"""

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from .config import DEFAULT_API_URL, DEFAULT_TIMEOUT, MonitorConfig
from .errors import ApiError, ConnectionError
from .types import ListJobMessagesResponse

logger = logging.getLogger(__name__)


class MessagesClient:
    """Client for the job message listing endpoint

    Example:
        >>> with MessagesClient("https://dataflow.googleapis.com") as client:
        ...     page = client.list("my-project", "2015-03-04_12_00_00-123")
        ...     for message in page.job_messages or []:
        ...         print(message.text)
    """

    def __init__(
        self,
        url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.Client] = None,
    ):
        """Initialize client

        Args:
            url: Service root URL
            timeout: Request timeout in seconds
            http_client: Pre-configured httpx client (auth headers, mock
                transport). The caller keeps ownership of it.
        """
        self.url = url.rstrip("/")
        self.timeout = timeout
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout)

    @classmethod
    def from_config(cls, config: MonitorConfig) -> "MessagesClient":
        return cls(url=config.base_url, timeout=config.timeout)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _messages_url(self, project_id: str, job_id: str) -> str:
        return (
            f"{self.url}/v1b3/projects/{quote(project_id, safe='')}"
            f"/jobs/{quote(job_id, safe='')}/messages"
        )

    def list(
        self, project_id: str, job_id: str, page_token: Optional[str] = None
    ) -> ListJobMessagesResponse:
        """Fetch one page of messages for a job

        Args:
            project_id: Project owning the job
            job_id: ID of the job
            page_token: Continuation token from the previous page, if any

        Returns:
            ListJobMessagesResponse with the page's messages and next token
        """
        params = {}
        if page_token is not None:
            params["pageToken"] = page_token

        logger.debug("Listing messages for job %s (page token: %s)", job_id, page_token)
        try:
            response = self._client.get(self._messages_url(project_id, job_id), params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ApiError(
                code=e.response.status_code,
                message=e.response.reason_phrase or "HTTP error",
                data=e.response.text,
                url=str(e.request.url),
            ) from e
        except httpx.HTTPError as e:
            raise ConnectionError(f"HTTP error: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise ApiError(
                code=response.status_code,
                message="Response is not valid JSON",
                url=str(response.request.url),
            ) from e

        if not isinstance(data, dict):
            raise ApiError(
                code=response.status_code,
                message="Response must be a JSON object",
                data=data,
                url=str(response.request.url),
            )

        return ListJobMessagesResponse.from_dict(data)
