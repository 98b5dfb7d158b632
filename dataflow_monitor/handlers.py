"""Consumers for batches of job messages"""

import logging
import sys
from abc import ABC, abstractmethod
from typing import Optional, Sequence, TextIO

from .types import (
    JOB_MESSAGE_DETAILED,
    JOB_MESSAGE_ERROR,
    JOB_MESSAGE_WARNING,
    JobMessage,
)

UNKNOWN_TIMESTAMP = "UNKNOWN TIMESTAMP: "

_IMPORTANCE_LABELS = {
    JOB_MESSAGE_ERROR: "Error:   ",
    JOB_MESSAGE_WARNING: "Warning: ",
    JOB_MESSAGE_DETAILED: "Detail:  ",
}

_IMPORTANCE_LEVELS = {
    JOB_MESSAGE_ERROR: logging.ERROR,
    JOB_MESSAGE_WARNING: logging.WARNING,
    JOB_MESSAGE_DETAILED: logging.DEBUG,
}


def _is_renderable(message: JobMessage) -> bool:
    return (
        isinstance(message.text, str)
        and bool(message.text)
        and isinstance(message.importance, str)
        and message.importance in _IMPORTANCE_LABELS
    )


class JobMessagesHandler(ABC):
    """Receives each batch of messages retrieved for a job"""

    @abstractmethod
    def process(self, messages: Sequence[JobMessage]) -> None:
        """Process the messages."""


class PrintHandler(JobMessagesHandler):
    """Writes messages to a text stream, one line each"""

    def __init__(self, stream: Optional[TextIO] = None):
        self.out = stream if stream is not None else sys.stdout

    def process(self, messages: Sequence[JobMessage]) -> None:
        for message in messages:
            if not _is_renderable(message):
                continue
            timestamp = message.timestamp
            if timestamp is None:
                self.out.write(UNKNOWN_TIMESTAMP)
            else:
                self.out.write(f"{timestamp}: ")
            self.out.write(_IMPORTANCE_LABELS[message.importance])
            self.out.write(message.text + "\n")
        self.out.flush()


class LoggingHandler(JobMessagesHandler):
    """Forwards messages to a logger at a level matching their importance"""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def process(self, messages: Sequence[JobMessage]) -> None:
        for message in messages:
            if not _is_renderable(message):
                continue
            timestamp = message.timestamp
            self.logger.log(
                _IMPORTANCE_LEVELS[message.importance],
                message.text,
                extra={
                    "job_message_id": message.id,
                    "job_message_time": str(timestamp) if timestamp is not None else None,
                },
            )
