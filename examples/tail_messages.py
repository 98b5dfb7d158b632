"""Tail Job Messages Example

Polls a running job for new messages and prints them as they arrive.

Usage:
    export DATAFLOW_PROJECT=my-project
    python examples/tail_messages.py 2015-03-04_12_00_00-1234567890
"""

import logging
import sys
import time

from dataflow_monitor import (
    JobMonitor,
    MessagesClient,
    MonitorConfig,
    PrintHandler,
    get_gcloud_cancel_command,
    get_job_monitoring_page_url,
)

POLL_INTERVAL_SECONDS = 10


def main(job_id: str) -> None:
    logging.basicConfig(level=logging.INFO)
    config = MonitorConfig.from_env()
    if not config.project_id:
        print("Set DATAFLOW_PROJECT to the project owning the job")
        sys.exit(1)

    print(f"Monitoring page: {get_job_monitoring_page_url(config.project_id, job_id)}")
    print(f"To cancel:       {get_gcloud_cancel_command(config.project_id, job_id)}")
    print()

    handler = PrintHandler()
    checkpoint = 0
    with MessagesClient.from_config(config) as client:
        monitor = JobMonitor(config.project_id, client)
        try:
            while True:
                checkpoint = monitor.process_new_messages(job_id, checkpoint, handler)
                time.sleep(POLL_INTERVAL_SECONDS)
        except KeyboardInterrupt:
            print("\nStopped")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(2)
    main(sys.argv[1])
