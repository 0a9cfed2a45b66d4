from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class AppConfig(BaseModel):
    sample_interval_ms: int = Field(default=200, ge=20, le=5000)
    absent_samples_to_end: int = Field(default=1, ge=1)
    count_sleeping_as_running: bool = False
    join_timeout_ms: int = Field(default=2000, ge=0)
    dark_mode: bool = True
    beep_on_session_end: bool = False
    log_level: LogLevel = "INFO"

    def to_tracker_config(self) -> dict:
        return {
            "sample_interval_ms": self.sample_interval_ms,
            "absent_samples_to_end": self.absent_samples_to_end,
            "count_sleeping_as_running": self.count_sleeping_as_running,
            "join_timeout_ms": self.join_timeout_ms,
        }
