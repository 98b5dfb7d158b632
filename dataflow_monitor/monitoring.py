"""Helpers for monitoring jobs submitted to the Dataflow service"""

import logging
from datetime import datetime
from typing import Iterable, Iterator, Optional, Union
from urllib.parse import quote

from .handlers import JobMessagesHandler
from .timeutil import Instant
from .types import JobMessage, JobState, ListJobMessagesResponse

logger = logging.getLogger(__name__)

GCLOUD_DATAFLOW_PREFIX = "gcloud alpha dataflow"
MONITORING_PAGE_URL = "https://console.developers.google.com/project/{}/dataflow/job/{}"

_DATAFLOW_STATE_TO_JOB_STATE = {
    "JOB_STATE_UNKNOWN": JobState.UNKNOWN,
    "JOB_STATE_STOPPED": JobState.STOPPED,
    "JOB_STATE_RUNNING": JobState.RUNNING,
    "JOB_STATE_DONE": JobState.DONE,
    "JOB_STATE_FAILED": JobState.FAILED,
    "JOB_STATE_CANCELLED": JobState.CANCELLED,
}

Checkpoint = Union[Instant, datetime, int]


def to_state(state_name: Optional[str]) -> JobState:
    """Map a service job state name to a JobState; unrecognized names map to UNKNOWN"""
    if not isinstance(state_name, str):
        return JobState.UNKNOWN
    return _DATAFLOW_STATE_TO_JOB_STATE.get(state_name, JobState.UNKNOWN)


def compare_by_timestamp(a: JobMessage, b: JobMessage) -> int:
    """Order two messages by timestamp, unknown timestamps first.

    A message whose timestamp is unknown compares as less than anything,
    including another unknown one, so this is not a consistent ordering
    for such pairs. Use :func:`sort_messages` to sort a batch.
    """
    t1 = a.timestamp
    if t1 is None:
        return -1
    t2 = b.timestamp
    if t2 is None:
        return 1
    if t1 < t2:
        return -1
    if t1 > t2:
        return 1
    return 0


def _sort_key(message: JobMessage):
    timestamp = message.timestamp
    if timestamp is None:
        return (0,)
    return (1, timestamp)


def sort_messages(messages: Iterable[JobMessage]) -> list[JobMessage]:
    """Sort messages ascending by timestamp.

    Messages with an unknown timestamp come first, in their original order.
    """
    return sorted(messages, key=_sort_key)


def _to_instant(checkpoint: Checkpoint) -> Instant:
    if isinstance(checkpoint, Instant):
        return checkpoint
    if isinstance(checkpoint, datetime):
        return Instant.from_datetime(checkpoint)
    return Instant.from_millis(checkpoint)


class JobMonitor:
    """Retrieves the status messages of a running job

    Example:
        >>> with MessagesClient() as client:
        ...     monitor = JobMonitor("my-project", client)
        ...     messages = monitor.get_job_messages(job_id, 0)
        ...     PrintHandler().process(messages)
    """

    def __init__(self, project_id: str, messages_client):
        """
        Args:
            project_id: Project owning the monitored jobs
            messages_client: Anything with a ``list(project_id, job_id, page_token)``
                method returning a ListJobMessagesResponse, normally a MessagesClient
        """
        self.project_id = project_id
        self.messages_client = messages_client

    def iter_pages(self, job_id: str) -> Iterator[ListJobMessagesResponse]:
        """Yield successive non-empty pages of messages for a job"""
        page_token = None
        while True:
            response = self.messages_client.list(self.project_id, job_id, page_token)
            if response is None or not response.job_messages:
                return

            yield response

            if response.next_page_token is None:
                return
            page_token = response.next_page_token

    def get_job_messages(self, job_id: str, start_timestamp: Checkpoint) -> list[JobMessage]:
        """Return job messages sorted in ascending order by timestamp

        Args:
            job_id: ID of the job to get the messages for
            start_timestamp: Return only messages with a timestamp strictly
                after this one (Instant, datetime or epoch milliseconds)

        Returns:
            List of messages. Messages without a decodable timestamp are
            never included.

        Raises:
            ConnectionError, ApiError: a page request failed
        """
        start = _to_instant(start_timestamp)
        all_messages = []
        pages = 0
        for page in self.iter_pages(job_id):
            pages += 1
            for message in page.job_messages:
                timestamp = message.timestamp
                if timestamp is None:
                    continue
                if timestamp > start:
                    all_messages.append(message)

        logger.debug(
            "Fetched %d new messages for job %s across %d pages", len(all_messages), job_id, pages
        )
        return sort_messages(all_messages)

    def process_new_messages(
        self, job_id: str, start_timestamp: Checkpoint, handler: JobMessagesHandler
    ) -> Instant:
        """Hand messages newer than ``start_timestamp`` to ``handler``

        Returns:
            The checkpoint to pass on the next call: the timestamp of the
            newest message delivered, or ``start_timestamp`` if there was none.
        """
        start = _to_instant(start_timestamp)
        messages = self.get_job_messages(job_id, start)
        handler.process(messages)
        if not messages:
            return start
        return messages[-1].timestamp


def get_job_monitoring_page_url(project_name: str, job_id: str) -> str:
    """URL of the job's page in the developers console"""
    try:
        # A project name is accepted in place of the id; the console redirects.
        return MONITORING_PAGE_URL.format(
            quote(project_name, safe="", encoding="utf-8"),
            quote(job_id, safe="", encoding="utf-8"),
        )
    except UnicodeEncodeError as e:
        raise AssertionError(f"Cannot encode job identifiers as UTF-8: {e}") from e


def get_gcloud_cancel_command(project_name: str, job_id: str) -> str:
    return f"{GCLOUD_DATAFLOW_PREFIX} jobs --project={project_name} cancel {job_id}"
