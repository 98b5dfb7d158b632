"""Dataflow Monitor Configuration"""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_API_URL = "https://dataflow.googleapis.com"
DEFAULT_TIMEOUT = 30.0


@dataclass
class MonitorConfig:
    """Connection settings for the monitoring client"""

    base_url: str = DEFAULT_API_URL
    project_id: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls) -> "MonitorConfig":
        """Build a config from ``DATAFLOW_API_URL``, ``DATAFLOW_PROJECT`` and ``DATAFLOW_TIMEOUT``"""
        return cls(
            base_url=os.getenv("DATAFLOW_API_URL", DEFAULT_API_URL),
            project_id=os.getenv("DATAFLOW_PROJECT") or None,
            timeout=float(os.getenv("DATAFLOW_TIMEOUT", str(DEFAULT_TIMEOUT))),
        )
