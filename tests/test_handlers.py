"""Tests for message sinks"""

import io
import logging

from dataflow_monitor import JobMessage, LoggingHandler, PrintHandler


def _render(messages):
    out = io.StringIO()
    PrintHandler(out).process(messages)
    return out.getvalue()


def test_unknown_timestamp_error():
    message = JobMessage(text="bad", importance="JOB_MESSAGE_ERROR", time=None)
    assert _render([message]) == "UNKNOWN TIMESTAMP: Error:   bad\n"


def test_known_timestamp_labels():
    messages = [
        JobMessage(text="w", importance="JOB_MESSAGE_WARNING", time="2015-03-04T12:34:56.5Z"),
        JobMessage(text="d", importance="JOB_MESSAGE_DETAILED", time="2015-03-04T12:34:57Z"),
    ]
    assert _render(messages) == (
        "2015-03-04T12:34:56.500Z: Warning: w\n"
        "2015-03-04T12:34:57.000Z: Detail:  d\n"
    )


def test_skips_unrecognized_or_missing_importance():
    messages = [
        JobMessage(text="debug", importance="JOB_MESSAGE_DEBUG", time=None),
        JobMessage(text="none", importance=None, time=None),
    ]
    assert _render(messages) == ""


def test_skips_empty_text():
    messages = [
        JobMessage(text="", importance="JOB_MESSAGE_ERROR"),
        JobMessage(text=None, importance="JOB_MESSAGE_ERROR"),
    ]
    assert _render(messages) == ""


def test_flushes_once_per_batch():
    class _CountingStream(io.StringIO):
        flushes = 0

        def flush(self):
            self.flushes += 1
            super().flush()

    stream = _CountingStream()
    messages = [JobMessage(text=str(i), importance="JOB_MESSAGE_ERROR") for i in range(3)]
    PrintHandler(stream).process(messages)

    assert stream.flushes == 1
    assert stream.getvalue().count("\n") == 3


def test_logging_handler_levels(caplog):
    logger = logging.getLogger("test.jobmessages")
    messages = [
        JobMessage(id="1", text="boom", importance="JOB_MESSAGE_ERROR", time="2015-03-04T12:00:00Z"),
        JobMessage(id="2", text="careful", importance="JOB_MESSAGE_WARNING"),
        JobMessage(id="3", text="fyi", importance="JOB_MESSAGE_DETAILED"),
        JobMessage(id="4", text="hidden", importance="JOB_MESSAGE_DEBUG"),
    ]

    with caplog.at_level(logging.DEBUG, logger="test.jobmessages"):
        LoggingHandler(logger).process(messages)

    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [
        (logging.ERROR, "boom"),
        (logging.WARNING, "careful"),
        (logging.DEBUG, "fyi"),
    ]
    assert caplog.records[0].job_message_id == "1"
    assert caplog.records[0].job_message_time == "2015-03-04T12:00:00.000Z"
    assert caplog.records[1].job_message_time is None


def test_out_of_range_time_renders_as_unknown():
    """A seconds/nanos pair beyond year 9999 does not break the batch"""
    messages = [
        JobMessage(text="far", importance="JOB_MESSAGE_WARNING", time={"seconds": "253402300800"}),
        JobMessage(text="ok", importance="JOB_MESSAGE_ERROR", time={"seconds": 0}),
    ]
    assert _render(messages) == (
        "UNKNOWN TIMESTAMP: Warning: far\n"
        "1970-01-01T00:00:00.000Z: Error:   ok\n"
    )


def test_non_string_fields_are_skipped():
    messages = [
        JobMessage(text=42, importance="JOB_MESSAGE_ERROR"),
        JobMessage(text="list importance", importance=["JOB_MESSAGE_ERROR"]),
    ]
    assert _render(messages) == ""


def test_from_dict_drops_non_string_fields():
    message = JobMessage.from_dict(
        {"id": 7, "messageText": 42, "messageImportance": ["JOB_MESSAGE_ERROR"], "time": None}
    )

    assert message.id is None
    assert message.text is None
    assert message.importance is None
    assert _render([message]) == ""
