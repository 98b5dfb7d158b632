"""Dataflow Monitor Types"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .timeutil import Instant, from_cloud_time

JOB_MESSAGE_ERROR = "JOB_MESSAGE_ERROR"
JOB_MESSAGE_WARNING = "JOB_MESSAGE_WARNING"
JOB_MESSAGE_DETAILED = "JOB_MESSAGE_DETAILED"


def _str_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


class JobState(str, Enum):
    """State of a job as reported by the service"""

    UNKNOWN = "UNKNOWN"
    STOPPED = "STOPPED"
    RUNNING = "RUNNING"
    DONE = "DONE"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in (JobState.DONE, JobState.FAILED, JobState.CANCELLED)


@dataclass(frozen=True)
class JobMessage:
    """A single status message emitted by a running job"""

    id: Optional[str] = None
    text: Optional[str] = None
    importance: Optional[str] = None
    time: Any = None

    @property
    def timestamp(self) -> Optional[Instant]:
        """Decoded ``time``, or ``None`` when it is missing or malformed"""
        return from_cloud_time(self.time)

    @classmethod
    def from_dict(cls, data: dict) -> "JobMessage":
        return cls(
            id=_str_or_none(data.get("id")),
            text=_str_or_none(data.get("messageText")),
            importance=_str_or_none(data.get("messageImportance")),
            time=data.get("time"),
        )


@dataclass
class ListJobMessagesResponse:
    """One page of the message listing"""

    job_messages: Optional[list[JobMessage]] = None
    next_page_token: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "ListJobMessagesResponse":
        raw_messages = data.get("jobMessages")
        messages = None
        if isinstance(raw_messages, list):
            messages = [
                JobMessage.from_dict(m) for m in raw_messages if isinstance(m, dict)
            ]
        return cls(job_messages=messages, next_page_token=data.get("nextPageToken") or None)
