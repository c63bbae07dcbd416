"""
Trigger for the external job-scraping pipeline.

The pipeline is an opaque process; this module only starts it, logs its
output and records how the last run ended. One run at a time per process.
"""

import logging
import shlex
import subprocess
import threading
from datetime import UTC, datetime
from typing import Any

logger = logging.getLogger(__name__)


class PipelineRunner:
    """Fire-and-forget runner with {isRunning, lastRun, lastResult} status."""

    def __init__(self, command: str | list[str], workdir: str = "."):
        self.command = shlex.split(command) if isinstance(command, str) else list(command)
        self.workdir = workdir
        self._lock = threading.Lock()
        self._is_running = False
        self._last_run: str | None = None
        self._last_result: dict[str, Any] | None = None

    def status(self) -> dict[str, Any]:
        with self._lock:
            status: dict[str, Any] = {"isRunning": self._is_running}
            if self._last_run is not None:
                status["lastRun"] = self._last_run
            if self._last_result is not None:
                status["lastResult"] = dict(self._last_result)
            return status

    def try_start(self) -> str | None:
        """Mark a run as started. Returns the start time, or None if one is in flight."""
        with self._lock:
            if self._is_running:
                return None
            self._is_running = True
        return datetime.now(UTC).isoformat()

    def run(self) -> None:
        """Run the pipeline to completion. Call only after try_start succeeded."""
        logger.info("[Pipeline] Starting: %s (cwd=%s)", " ".join(self.command), self.workdir)
        try:
            completed = subprocess.run(
                self.command,
                cwd=self.workdir,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            logger.error("[Pipeline] Failed to start: %s", e)
            self._finish(success=False, exit_code=None)
            return

        for line in completed.stdout.splitlines():
            logger.info("[Pipeline] %s", line)

        success = completed.returncode == 0
        if success:
            logger.info("[Pipeline] Completed successfully")
        else:
            logger.error("[Pipeline] Failed with code %s", completed.returncode)
            logger.error("[Pipeline] Error output: %s", completed.stderr)
        self._finish(success=success, exit_code=completed.returncode)

    def _finish(self, success: bool, exit_code: int | None) -> None:
        with self._lock:
            self._is_running = False
            self._last_run = datetime.now(UTC).isoformat()
            self._last_result = {
                "success": success,
                "exitCode": exit_code,
                "platforms": {},
                "normalized": 0,
                "filtered": 0,
            }
