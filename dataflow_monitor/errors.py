"""Dataflow Monitor Errors"""

from typing import Any, Optional


class MonitoringError(Exception):
    """Base exception for Dataflow Monitor"""

    pass


class ConnectionError(MonitoringError):
    """Transport failure while talking to the service"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ApiError(MonitoringError):
    """The Dataflow API rejected a message listing or answered with an unusable body

    Attributes:
        code: HTTP status of the response
        message: Reason phrase or a description of what was wrong with the body
        data: Response body, when there is one worth keeping
        url: URL of the listing request that failed
    """

    def __init__(
        self,
        code: int,
        message: str,
        data: Optional[Any] = None,
        url: Optional[str] = None,
    ):
        self.code = code
        self.message = message
        self.data = data
        self.url = url
        detail = f" ({url})" if url else ""
        super().__init__(f"API error {code}: {message}{detail}")

    @property
    def status_code(self) -> int:
        return self.code
