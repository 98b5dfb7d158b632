"""Dataflow Monitor - job message retrieval for the Dataflow service"""

from .client import MessagesClient
from .config import MonitorConfig
from .types import JobMessage, JobState, ListJobMessagesResponse
from .timeutil import Instant, from_cloud_time, to_cloud_time
from .handlers import JobMessagesHandler, PrintHandler, LoggingHandler
from .monitoring import (
    JobMonitor,
    compare_by_timestamp,
    get_gcloud_cancel_command,
    get_job_monitoring_page_url,
    sort_messages,
    to_state,
)
from .errors import MonitoringError, ConnectionError, ApiError

__version__ = "0.1.0"

__all__ = [
    "MessagesClient",
    "MonitorConfig",
    "JobMessage",
    "JobState",
    "ListJobMessagesResponse",
    "Instant",
    "from_cloud_time",
    "to_cloud_time",
    "JobMessagesHandler",
    "PrintHandler",
    "LoggingHandler",
    "JobMonitor",
    "compare_by_timestamp",
    "get_gcloud_cancel_command",
    "get_job_monitoring_page_url",
    "sort_messages",
    "to_state",
    "MonitoringError",
    "ConnectionError",
    "ApiError",
]
